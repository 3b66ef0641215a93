# -*- coding: utf-8 -*-
# deepwells/apps.py

from __future__ import annotations

from django.apps import AppConfig


class DeepwellsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "deepwells"
    verbose_name = "Deepwells"
