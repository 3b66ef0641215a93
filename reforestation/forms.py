# -*- coding: utf-8 -*-
# reforestation/forms.py

from __future__ import annotations

from django import forms

from reforestation.models import ReforestationActivity
from reforestation.services.activities import KmzValidationError, validate_kmz_name
from uploads.forms import MultipleImageField

_TEXT = {"class": "form-control"}
_DATE = forms.DateInput(attrs={"class": "form-control", "type": "date"}, format="%Y-%m-%d")
_NUM = forms.NumberInput(attrs={**_TEXT, "step": "0.01", "min": "0"})


class ReforestationForm(forms.ModelForm):
    photos = MultipleImageField(label="Photos (up to 3, replaces the current set)")
    kmz_file = forms.FileField(
        required=False,
        label="KMZ file",
        widget=forms.ClearableFileInput(attrs={**_TEXT, "accept": ".kmz"}),
    )

    class Meta:
        model = ReforestationActivity
        fields = [
            "activity_name",
            "activity_type",
            "location",
            "implementing_agency",
            "status",
            "start_date",
            "target_date",
            "target_area",
            "trees_planted",
            "tree_species",
            "budget",
            "initial_survival_rate",
            "initial_survival_date",
            "final_survival_rate",
            "final_survival_date",
            "description",
            "remarks",
        ]
        widgets = {
            "activity_name": forms.TextInput(attrs=_TEXT),
            "activity_type": forms.TextInput(attrs=_TEXT),
            "location": forms.TextInput(attrs=_TEXT),
            "implementing_agency": forms.TextInput(attrs=_TEXT),
            "status": forms.TextInput(attrs=_TEXT),
            "start_date": _DATE,
            "target_date": _DATE,
            "target_area": _NUM,
            "trees_planted": forms.NumberInput(attrs={**_TEXT, "min": "0"}),
            "tree_species": forms.TextInput(attrs=_TEXT),
            "budget": _NUM,
            "initial_survival_rate": _NUM,
            "initial_survival_date": _DATE,
            "final_survival_rate": _NUM,
            "final_survival_date": _DATE,
            "description": forms.Textarea(attrs={**_TEXT, "rows": 3}),
            "remarks": forms.Textarea(attrs={**_TEXT, "rows": 3}),
        }
        labels = {"target_area": "Target area (ha)"}

    _NUMERIC_DEFAULTS = (
        "target_area",
        "trees_planted",
        "budget",
        "initial_survival_rate",
        "final_survival_rate",
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in self._NUMERIC_DEFAULTS:
            self.fields[name].required = False
        self.fields["activity_name"].error_messages["required"] = "Activity name is required."

    def clean(self):
        cleaned = super().clean()
        for name in self._NUMERIC_DEFAULTS:
            if cleaned.get(name) in (None, ""):
                cleaned[name] = 0
        return cleaned

    def clean_kmz_file(self):
        upload = self.cleaned_data.get("kmz_file")
        if not upload:
            return None
        try:
            validate_kmz_name(upload.name)
        except KmzValidationError as exc:
            raise forms.ValidationError(str(exc))
        return upload


class ReforestationFilterForm(forms.Form):
    q = forms.CharField(required=False, widget=forms.TextInput(attrs={**_TEXT, "placeholder": "Search activity or location"}))
    activity_type = forms.ChoiceField(required=False, widget=forms.Select(attrs={"class": "form-select"}))
    status = forms.ChoiceField(required=False, widget=forms.Select(attrs={"class": "form-select"}))

    def __init__(self, *args, types=(), statuses=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["activity_type"].choices = [("", "All types")] + [(t, t) for t in types]
        self.fields["status"].choices = [("", "All statuses")] + [(s, s) for s in statuses]
