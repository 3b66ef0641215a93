# -*- coding: utf-8 -*-
# projects/forms.py

from __future__ import annotations

from django import forms

from projects.models import Project, ProjectStatus
from uploads.forms import MultipleImageField

_TEXT = {"class": "form-control"}
_DATE = forms.DateInput(attrs={"class": "form-control", "type": "date"}, format="%Y-%m-%d")
_AREA = forms.Textarea(attrs={"class": "form-control", "rows": 3})


class ProjectForm(forms.ModelForm):
    """
    Project fields. contract_docs_link is only offered to elevated users;
    for everyone else the field is absent and the stored value is kept.
    """

    class Meta:
        model = Project
        fields = [
            "name",
            "implementing_agency",
            "location",
            "contractor",
            "contract_amount",
            "revised_contract_amount",
            "contract_docs_link",
            "ntp_date",
            "original_duration",
            "time_extension",
            "original_completion",
            "revised_completion",
            "activities",
            "issues",
            "remarks",
            "other_details",
        ]
        widgets = {
            "name": forms.TextInput(attrs=_TEXT),
            "implementing_agency": forms.TextInput(attrs=_TEXT),
            "location": forms.TextInput(attrs=_TEXT),
            "contractor": forms.TextInput(attrs=_TEXT),
            "contract_amount": forms.NumberInput(attrs={**_TEXT, "step": "0.01", "min": "0"}),
            "revised_contract_amount": forms.NumberInput(attrs={**_TEXT, "step": "0.01", "min": "0"}),
            "contract_docs_link": forms.URLInput(attrs=_TEXT),
            "ntp_date": _DATE,
            "original_duration": forms.NumberInput(attrs={**_TEXT, "min": "0"}),
            "time_extension": forms.NumberInput(attrs={**_TEXT, "min": "0"}),
            "original_completion": _DATE,
            "revised_completion": _DATE,
            "activities": _AREA,
            "issues": _AREA,
            "remarks": _AREA,
            "other_details": _AREA,
        }
        labels = {
            "ntp_date": "NTP date",
            "original_duration": "Original duration (days)",
            "time_extension": "Time extension (days)",
            "contract_docs_link": "Contract documents link",
        }

    def __init__(self, *args, elevated: bool = False, **kwargs):
        super().__init__(*args, **kwargs)
        if not elevated:
            self.fields.pop("contract_docs_link", None)
        self.fields["contract_amount"].required = False
        self.fields["original_duration"].required = False
        self.fields["time_extension"].required = False
        self.fields["name"].error_messages["required"] = "Project name is required."
        self.fields["contractor"].error_messages["required"] = "Contractor is required."

    def clean_contract_amount(self):
        return self.cleaned_data.get("contract_amount") or 0

    def clean_original_duration(self):
        return self.cleaned_data.get("original_duration") or 0

    def clean_time_extension(self):
        return self.cleaned_data.get("time_extension") or 0


class AccomplishmentEntryForm(forms.Form):
    """
    The snapshot part of the project form. Always upserted on save.
    """

    date = forms.DateField(required=False, widget=_DATE, label="Accomplishment date")
    percent = forms.FloatField(
        required=False, min_value=0, label="To-date %",
        widget=forms.NumberInput(attrs={**_TEXT, "step": "0.01"}),
    )
    prev_percent = forms.FloatField(
        required=False, min_value=0, label="Previous %",
        widget=forms.NumberInput(attrs={**_TEXT, "step": "0.01"}),
    )
    planned_percent = forms.FloatField(
        required=False, min_value=0, label="Planned %",
        widget=forms.NumberInput(attrs={**_TEXT, "step": "0.01"}),
    )
    action = forms.CharField(required=False, widget=_AREA, label="Action taken")

    def snapshot(self, project: Project) -> dict:
        data = self.cleaned_data
        return {
            "date": data.get("date"),
            "percent": data.get("percent") or 0,
            "prev_percent": data.get("prev_percent") or 0,
            "planned_percent": data.get("planned_percent") or 0,
            "action": data.get("action") or "",
            "activities": project.activities,
            "issue": project.issues,
            "remarks": project.remarks,
        }


class BillingRowForm(forms.Form):
    date = forms.DateField(required=False, widget=_DATE)
    amount = forms.DecimalField(
        required=False, min_value=0, max_digits=16, decimal_places=2,
        widget=forms.NumberInput(attrs={**_TEXT, "step": "0.01", "placeholder": "Amount (PHP)"}),
    )
    description = forms.CharField(
        required=False, max_length=300,
        widget=forms.TextInput(attrs={**_TEXT, "placeholder": "Description"}),
    )


BillingFormSet = forms.formset_factory(BillingRowForm, extra=1, can_delete=True)


class ProjectPhotosForm(forms.Form):
    photos = MultipleImageField(label="Photos (up to 3, replaces the current set)")


class ProjectFilterForm(forms.Form):
    q = forms.CharField(required=False, widget=forms.TextInput(attrs={**_TEXT, "placeholder": "Search name or contractor"}))
    agency = forms.ChoiceField(required=False, widget=forms.Select(attrs={"class": "form-select"}))
    status = forms.ChoiceField(
        required=False,
        choices=[("", "All statuses")] + list(ProjectStatus.choices),
        widget=forms.Select(attrs={"class": "form-select"}),
    )

    def __init__(self, *args, agencies=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["agency"].choices = [("", "All agencies")] + [(a, a) for a in agencies]
