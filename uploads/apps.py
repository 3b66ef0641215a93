# -*- coding: utf-8 -*-
# uploads/apps.py

from __future__ import annotations
from django.apps import AppConfig


class UploadsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "uploads"
    verbose_name = "Uploads"
