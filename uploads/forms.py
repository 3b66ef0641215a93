# -*- coding: utf-8 -*-
# uploads/forms.py

from __future__ import annotations

from django import forms


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleImageField(forms.ImageField):
    """
    Accepts several images from one <input multiple>. Cleans to a list.
    """

    def __init__(self, *args, max_files: int = 3, **kwargs):
        self.max_files = max_files
        kwargs.setdefault("widget", MultipleFileInput(attrs={"class": "form-control", "accept": "image/*"}))
        kwargs.setdefault("required", False)
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single = super().clean
        if isinstance(data, (list, tuple)):
            files = [single(d, initial) for d in data if d]
        else:
            files = [single(data, initial)] if data else []
        files = [f for f in files if f]
        if len(files) > self.max_files:
            raise forms.ValidationError(f"Upload at most {self.max_files} photos.")
        return files
