# -*- coding: utf-8 -*-
# notifications/context_processors.py
# Purpose:
# Poll interval for dashboard.js without adding view logic everywhere.

from __future__ import annotations

from typing import Any, Dict

from config.services import get_setting


def polling(request) -> Dict[str, Any]:
    try:
        interval = int(get_setting("poll_interval_ms"))
    except (TypeError, ValueError):
        interval = 15000
    return {"poll_interval_ms": max(interval, 1000)}
