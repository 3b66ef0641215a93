# accounts/admin.py
# -*- coding: utf-8 -*-

from django import forms
from django.contrib import admin, messages
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin

from accounts.services.approval import approve_user, send_set_password_email

User = get_user_model()


class UserCreateInviteForm(forms.ModelForm):
    """
    Admin "Add user" form for the invite flow.

    Collects identity and access fields only. The password is set via the emailed link.
    """

    class Meta:
        model = User
        fields = ("username", "email", "is_approved", "access_level", "is_active")


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    """
    Dashboard users.

    - Users added here get an unusable password and a one-time "set password" email.
    - The "Approve" action mirrors the in-app user management page.
    """

    add_form = UserCreateInviteForm

    list_display = ("email", "username", "is_approved", "access_level", "is_superuser", "date_joined")
    list_filter = ("is_approved", "access_level", "is_superuser", "is_active")
    search_fields = ("username", "email", "first_name", "last_name")
    ordering = ("email",)
    actions = ("approve_selected",)

    fieldsets = (
        (None, {"fields": ("username", "email", "password")}),
        ("Dashboard access", {"fields": ("is_approved", "access_level", "approved_at")}),
        ("Personal info", {"fields": ("first_name", "last_name")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")}),
        ("Important dates", {"fields": ("last_login", "date_joined")}),
    )

    add_fieldsets = (
        (None, {
            "classes": ("wide",),
            "fields": ("username", "email", "is_approved", "access_level", "is_active"),
        }),
    )

    readonly_fields = ("approved_at",)

    def save_model(self, request, obj, form, change):
        is_new = obj.pk is None
        super().save_model(request, obj, form, change)

        if not is_new:
            return

        if not obj.email:
            messages.warning(
                request,
                "User created, but no email address was provided. No invite email was sent.",
            )
            return

        obj.set_unusable_password()
        obj.save(update_fields=["password"])

        sent = send_set_password_email(
            request=request,
            user=obj,
            subject="Set your password",
            intro="An account has been created for you on the project dashboard.",
        )
        if sent:
            messages.success(request, f"Invite email sent to {obj.email}.")
        else:
            messages.warning(request, f"User created, but the invite email to {obj.email} failed.")

    @admin.action(description="Approve selected users (level 1) and email a password link")
    def approve_selected(self, request, queryset):
        count = 0
        for user in queryset.filter(is_approved=False):
            approve_user(request=request, user_id=user.pk)
            count += 1
        self.message_user(request, f"Approved {count} user(s).", messages.SUCCESS)
