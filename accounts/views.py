# -*- coding: utf-8 -*-
# accounts/views.py

from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth import get_user_model
from django.contrib.auth import views as auth_views
from django.contrib.auth.forms import SetPasswordForm
from django.contrib.auth.tokens import default_token_generator
from django.http import Http404
from django.shortcuts import redirect, render
from django.utils.http import urlsafe_base64_decode
from django.views.decorators.http import require_POST

from accounts.forms import AccessLevelForm, ApprovedAuthenticationForm, SignupForm
from accounts.permissions import (
    VIEW_ONLY_SESSION_KEY,
    approved_required,
    require_admin,
)
from accounts.services.approval import (
    UserManagementError,
    approve_user,
    approved_users,
    pending_users,
    reject_user,
    set_access_level,
)
from config.services import signups_enabled

User = get_user_model()

logger = logging.getLogger("dashboard.accounts")


# ------------------------------------------------------------
# Login / view-only
# ------------------------------------------------------------

class DashboardLoginView(auth_views.LoginView):
    template_name = "accounts/login.html"
    authentication_form = ApprovedAuthenticationForm
    redirect_authenticated_user = True

    def get_context_data(self, **kwargs):
        ctx = super().get_context_data(**kwargs)
        ctx["signups_enabled"] = signups_enabled()
        return ctx

    def form_valid(self, form):
        # Signing in ends view-only mode.
        self.request.session.pop(VIEW_ONLY_SESSION_KEY, None)
        return super().form_valid(form)


@require_POST
def view_only_enter(request):
    if request.user.is_authenticated:
        return redirect("projects:list")
    request.session[VIEW_ONLY_SESSION_KEY] = True
    messages.info(request, "You are browsing in view-only mode.")
    return redirect("projects:list")


def view_only_exit(request):
    request.session.pop(VIEW_ONLY_SESSION_KEY, None)
    return redirect("accounts:login")


# ------------------------------------------------------------
# Sign-up (request an account)
# ------------------------------------------------------------

def signup(request):
    if not signups_enabled():
        messages.error(request, "Sign-ups are currently closed.")
        return redirect("accounts:login")

    if request.method == "POST":
        form = SignupForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info("Sign-up request from %s", user.email)
            messages.success(
                request,
                "Account request submitted. You can sign in once the admin approves it.",
            )
            return redirect("accounts:login")
    else:
        form = SignupForm()

    return render(request, "accounts/signup.html", {"form": form})


# ------------------------------------------------------------
# Invite flow: set password from emailed link
# ------------------------------------------------------------

def set_password_from_invite(request, uidb64: str, token: str):
    try:
        uid = urlsafe_base64_decode(uidb64).decode("utf-8")
        user = User.objects.get(pk=uid)
    except (ValueError, User.DoesNotExist, TypeError, UnicodeDecodeError):
        user = None

    if user is None or not default_token_generator.check_token(user, token):
        raise Http404("Invalid invite link.")

    if request.method == "POST":
        form = SetPasswordForm(user, request.POST)
        if form.is_valid():
            form.save()
            messages.success(request, "Password set. You can now log in.")
            return redirect("accounts:login")
    else:
        form = SetPasswordForm(user)

    return render(request, "accounts/set_password.html", {"form": form})


# ------------------------------------------------------------
# User management (admin only)
# ------------------------------------------------------------

@approved_required
def user_list(request):
    require_admin(request.user)

    approved = list(approved_users())
    level_forms = {u.pk: AccessLevelForm(instance=u, prefix=f"u{u.pk}") for u in approved}

    return render(
        request,
        "accounts/user_list.html",
        {
            "pending": pending_users(),
            "approved": [(u, level_forms[u.pk]) for u in approved],
        },
    )


@require_POST
@approved_required
def user_approve(request, user_id: int):
    require_admin(request.user)
    try:
        result = approve_user(request=request, user_id=user_id)
    except UserManagementError as exc:
        messages.error(request, str(exc))
        return redirect("accounts:user_list")

    if result.email_sent:
        messages.success(request, "User approved. A password link was emailed.")
    else:
        messages.warning(request, "User approved, but the email could not be sent.")
    return redirect("accounts:user_list")


@require_POST
@approved_required
def user_reject(request, user_id: int):
    require_admin(request.user)
    try:
        email = reject_user(user_id=user_id)
    except UserManagementError as exc:
        messages.error(request, str(exc))
    else:
        messages.success(request, f"Request from {email} rejected.")
    return redirect("accounts:user_list")


@require_POST
@approved_required
def user_set_level(request, user_id: int):
    require_admin(request.user)
    raw = (request.POST.get(f"u{user_id}-access_level") or request.POST.get("access_level") or "").strip()
    try:
        set_access_level(user_id=user_id, level=int(raw))
    except (ValueError, UserManagementError) as exc:
        messages.error(request, f"Could not change access level: {exc}")
    else:
        messages.success(request, "Access level updated.")
    return redirect("accounts:user_list")
