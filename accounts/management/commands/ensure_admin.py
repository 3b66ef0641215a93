# -*- coding: utf-8 -*-
# accounts/management/commands/ensure_admin.py
"""
Make sure the DASHBOARD_ADMIN_EMAIL account exists and is approved.

- Creates the user with an unusable password when missing and prints a
  set-password link (relative path; prefix with the site URL).
- Idempotent.

Usage
  python manage.py ensure_admin
  python manage.py ensure_admin --email someone@example.com
"""

from __future__ import annotations

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from accounts.services.approval import build_set_password_url


class Command(BaseCommand):
    help = "Create or repair the dashboard admin account."

    def add_arguments(self, parser):
        parser.add_argument("--email", default="", help="Defaults to DASHBOARD_ADMIN_EMAIL.")

    @transaction.atomic
    def handle(self, *args, **options):
        User = get_user_model()
        email = (options["email"] or getattr(settings, "DASHBOARD_ADMIN_EMAIL", "") or "").strip().lower()
        if not email:
            raise CommandError("No admin email given and DASHBOARD_ADMIN_EMAIL is empty.")

        user = User.objects.filter(email__iexact=email).first()
        created = user is None
        if created:
            user = User(username=email, email=email)
            user.set_unusable_password()

        user.is_approved = True
        user.access_level = User.AccessLevel.LEVEL_2
        user.is_staff = True
        if user.approved_at is None:
            user.approved_at = timezone.now()
        user.save()

        if created:
            self.stdout.write(f"Set the password at: {build_set_password_url(None, user)}")
            self.stdout.write(self.style.SUCCESS(f"Created admin {email}."))
        else:
            self.stdout.write(self.style.SUCCESS(f"Admin {email} is approved."))
