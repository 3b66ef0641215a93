# -*- coding: utf-8 -*-
# config/services.py
# Purpose:
# Resolve a dashboard setting: SiteSetting row -> Django setting -> default.

from __future__ import annotations

from typing import Any

from django.conf import settings

from config.models import SiteSetting

# key -> Django settings attribute used when no SiteSetting row exists
SETTING_FALLBACKS: dict[str, str] = {
    "signups_enabled": "DASHBOARD_SIGNUPS_ENABLED",
    "docx_template_path": "DOCX_TEMPLATE_PATH",
    "pdf_endpoint": "DOCX_PDF_ENDPOINT",
    "pdf_endpoint_type": "DOCX_PDF_ENDPOINT_TYPE",
    "pdf_timeout_seconds": "DOCX_PDF_TIMEOUT_SECONDS",
    "poll_interval_ms": "DASHBOARD_POLL_INTERVAL_MS",
}

SETTING_DEFAULTS: dict[str, Any] = {
    "signups_enabled": True,
    "docx_template_path": "",
    "pdf_endpoint": "",
    "pdf_endpoint_type": "",
    "pdf_timeout_seconds": 60,
    "poll_interval_ms": 15000,
}

_MISSING = object()


def get_setting(key: str, default: Any = _MISSING) -> Any:
    row = SiteSetting.objects.filter(key=key).only("value").first()
    if row is not None and row.value is not None:
        return row.value

    attr = SETTING_FALLBACKS.get(key)
    if attr:
        value = getattr(settings, attr, None)
        if value not in (None, ""):
            return value

    if default is not _MISSING:
        return default
    return SETTING_DEFAULTS.get(key)


def set_setting(key: str, value: Any, *, user=None, note: str = "") -> SiteSetting:
    row, _ = SiteSetting.objects.update_or_create(
        key=key,
        defaults={"value": value, "updated_by": user, **({"note": note} if note else {})},
    )
    return row


def signups_enabled() -> bool:
    return bool(get_setting("signups_enabled"))
