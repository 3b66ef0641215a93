# -*- coding: utf-8 -*-
# config/models.py

from __future__ import annotations

from django.conf import settings
from django.db import models


class SiteSetting(models.Model):
    """
    Runtime override for a single dashboard setting.

    value is JSON so booleans, numbers and strings survive a round trip
    through the admin without type juggling.

    Known keys (see config.services.SETTING_DEFAULTS):
    - signups_enabled
    - docx_template_path
    - pdf_endpoint / pdf_endpoint_type / pdf_timeout_seconds
    - poll_interval_ms
    """

    key = models.CharField(max_length=80, unique=True)
    value = models.JSONField(null=True, blank=True)
    note = models.CharField(max_length=200, blank=True)

    updated_at = models.DateTimeField(auto_now=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )

    class Meta:
        ordering = ["key"]

    def __str__(self) -> str:
        return f"{self.key}={self.value!r}"
