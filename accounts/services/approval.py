# -*- coding: utf-8 -*-
# accounts/services/approval.py
# Purpose:
# Admin user management: approve, reject, change access level.
# Approval email is best-effort: a mail failure never undoes the approval.

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.contrib.auth.tokens import default_token_generator
from django.core.mail import send_mail
from django.db import transaction
from django.urls import reverse
from django.utils import timezone
from django.utils.encoding import force_bytes
from django.utils.http import urlsafe_base64_encode

logger = logging.getLogger("dashboard.accounts")

User = get_user_model()


class UserManagementError(Exception):
    pass


@dataclass(frozen=True)
class ApprovalResult:
    user_id: int
    email_sent: bool


def build_set_password_url(request, user) -> str:
    uidb64 = urlsafe_base64_encode(force_bytes(user.pk))
    token = default_token_generator.make_token(user)
    path = reverse("accounts:set_password", kwargs={"uidb64": uidb64, "token": token})
    if request is None:
        return path
    return request.build_absolute_uri(path)


def send_set_password_email(*, request, user, subject: str, intro: str) -> bool:
    """
    Email a one-time set-password link. Returns False (and logs) on failure.
    """
    if not user.email:
        logger.warning("No email on user id=%s; set-password link not sent", user.pk)
        return False

    url = build_set_password_url(request, user)
    try:
        send_mail(
            subject=subject,
            message=(
                f"{intro}\n\n"
                "You can set or reset your password using the link below:\n\n"
                f"{url}\n\n"
                "If you did not expect this email, you can ignore it."
            ),
            from_email=None,  # DEFAULT_FROM_EMAIL
            recipient_list=[user.email],
        )
    except Exception:
        logger.warning("Set-password email to %s failed", user.email, exc_info=True)
        return False
    return True


def pending_users():
    return User.objects.filter(is_approved=False, is_superuser=False).order_by("date_joined")


def approved_users():
    return User.objects.filter(is_approved=True).order_by("email")


@transaction.atomic
def approve_user(*, request, user_id: int) -> ApprovalResult:
    user = User.objects.select_for_update().filter(pk=user_id).first()
    if user is None:
        raise UserManagementError("User not found.")

    user.is_approved = True
    user.access_level = User.AccessLevel.LEVEL_1
    user.approved_at = timezone.now()
    user.save(update_fields=["is_approved", "access_level", "approved_at"])
    logger.info("Approved user %s", user.email)

    sent = send_set_password_email(
        request=request,
        user=user,
        subject="Your dashboard account has been approved",
        intro="Your account request has been approved. You can now sign in.",
    )
    return ApprovalResult(user_id=user.pk, email_sent=sent)


@transaction.atomic
def reject_user(*, user_id: int) -> str:
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise UserManagementError("User not found.")
    if user.is_site_admin:
        raise UserManagementError("The admin account cannot be rejected.")
    email = user.email
    user.delete()
    logger.info("Rejected user %s", email)
    return email


def set_access_level(*, user_id: int, level: int) -> None:
    if level not in User.AccessLevel.values:
        raise UserManagementError(f"Unknown access level: {level}")
    updated = User.objects.filter(pk=user_id, is_approved=True).update(access_level=level)
    if not updated:
        raise UserManagementError("Approved user not found.")
    logger.info("Access level for user id=%s set to %s", user_id, level)
