# -*- coding: utf-8 -*-
# deepwells/forms.py

from __future__ import annotations

from django import forms

from deepwells.models import Deepwell, month_validator

_TEXT = {"class": "form-control"}


class DeepwellForm(forms.ModelForm):
    class Meta:
        model = Deepwell
        fields = ["name", "provider", "permit", "status", "rated_yield", "location", "municipality"]
        widgets = {
            "name": forms.TextInput(attrs=_TEXT),
            "provider": forms.Select(attrs={"class": "form-select"}),
            "permit": forms.TextInput(attrs=_TEXT),
            "status": forms.TextInput(attrs=_TEXT),
            "rated_yield": forms.NumberInput(attrs={**_TEXT, "step": "0.01", "min": "0"}),
            "location": forms.TextInput(attrs=_TEXT),
            "municipality": forms.TextInput(attrs=_TEXT),
        }
        labels = {"name": "Deepwell name"}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["rated_yield"].required = False
        self.fields["name"].error_messages["required"] = "Deepwell Name is required"

    def clean_rated_yield(self):
        return self.cleaned_data.get("rated_yield") or 0


class MonthRowForm(forms.Form):
    month = forms.CharField(
        required=False,
        validators=[month_validator],
        widget=forms.TextInput(attrs={**_TEXT, "type": "month"}),
    )
    production = forms.FloatField(
        required=False,
        widget=forms.NumberInput(attrs={**_TEXT, "step": "0.01", "placeholder": "Production"}),
    )


MonthFormSet = forms.formset_factory(MonthRowForm, extra=1, can_delete=True)


class DeepwellFilterForm(forms.Form):
    q = forms.CharField(required=False, widget=forms.TextInput(attrs={**_TEXT, "placeholder": "Search name, provider, permit"}))
    provider = forms.ChoiceField(
        required=False,
        choices=[("", "All providers")] + list(Deepwell.Provider.choices),
        widget=forms.Select(attrs={"class": "form-select"}),
    )
    status = forms.ChoiceField(required=False, widget=forms.Select(attrs={"class": "form-select"}))

    def __init__(self, *args, statuses=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["status"].choices = [("", "All statuses")] + [(s, s) for s in statuses]
