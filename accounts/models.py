# accounts/models.py
from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """
    Custom user model for the dashboard.

    Email is the login identity (username is kept for Django compatibility
    and mirrors the email on sign-up).

    Access:
    - New sign-ups are unapproved and cannot log in.
    - Approved users are level 1 (create/edit) or level 2 (elevated).
    - The site admin is any superuser or the DASHBOARD_ADMIN_EMAIL account.
    """

    class AccessLevel(models.IntegerChoices):
        LEVEL_1 = 1, "Level 1"
        LEVEL_2 = 2, "Level 2"

    email = models.EmailField(unique=True)

    is_approved = models.BooleanField(default=False, db_index=True)
    access_level = models.PositiveSmallIntegerField(
        choices=AccessLevel.choices,
        default=AccessLevel.LEVEL_1,
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    @property
    def is_site_admin(self) -> bool:
        if self.is_superuser:
            return True
        admin_email = (getattr(settings, "DASHBOARD_ADMIN_EMAIL", "") or "").strip().lower()
        return bool(admin_email) and (self.email or "").strip().lower() == admin_email

    @property
    def has_elevated_access(self) -> bool:
        return self.is_site_admin or self.access_level == self.AccessLevel.LEVEL_2

    @property
    def can_sign_in(self) -> bool:
        return self.is_site_admin or self.is_approved

    def __str__(self) -> str:
        return self.email or self.username
