# -*- coding: utf-8 -*-
# accounts/forms.py

from __future__ import annotations

from django import forms
from django.contrib.auth import get_user_model
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm

User = get_user_model()

_TEXT = forms.TextInput(attrs={"class": "form-control"})
_EMAIL = forms.EmailInput(attrs={"class": "form-control", "autocomplete": "email"})
_SELECT_SM = forms.Select(attrs={"class": "form-select form-select-sm"})


class ApprovedAuthenticationForm(AuthenticationForm):
    """
    Login form that refuses accounts still waiting for admin approval.
    """

    error_messages = {
        **AuthenticationForm.error_messages,
        "pending_approval": "Your account is pending approval.",
    }

    def __init__(self, request=None, *args, **kwargs):
        super().__init__(request, *args, **kwargs)
        self.fields["username"].label = "Email"
        self.fields["username"].widget = _EMAIL
        self.fields["password"].widget = forms.PasswordInput(attrs={"class": "form-control"})

    def confirm_login_allowed(self, user):
        super().confirm_login_allowed(user)
        if not user.can_sign_in:
            raise forms.ValidationError(
                self.error_messages["pending_approval"],
                code="pending_approval",
            )


class SignupForm(UserCreationForm):
    """
    Account request. The account stays unapproved until the admin approves it.
    """

    class Meta:
        model = User
        fields = ("email",)
        widgets = {"email": _EMAIL}

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for name in ("password1", "password2"):
            self.fields[name].widget.attrs["class"] = "form-control"

    def clean_email(self):
        email = (self.cleaned_data.get("email") or "").strip().lower()
        if User.objects.filter(email__iexact=email).exists():
            raise forms.ValidationError("An account with this email already exists.")
        return email

    def save(self, commit=True):
        user = super().save(commit=False)
        user.username = user.email
        user.is_approved = False
        user.access_level = User.AccessLevel.LEVEL_1
        if commit:
            user.save()
        return user


class AccessLevelForm(forms.ModelForm):
    class Meta:
        model = User
        fields = ("access_level",)
        widgets = {"access_level": _SELECT_SM}
