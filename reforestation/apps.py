# -*- coding: utf-8 -*-
# reforestation/apps.py

from __future__ import annotations

from django.apps import AppConfig


class ReforestationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "reforestation"
    verbose_name = "Reforestation"
