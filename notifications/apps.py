# -*- coding: utf-8 -*-
# notifications/apps.py

from __future__ import annotations

from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"
    verbose_name = "Change notifications"

    def ready(self) -> None:
        # Ensure signal handlers are registered.
        from . import signals  # noqa: F401
