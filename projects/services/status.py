# -*- coding: utf-8 -*-
# projects/services/status.py
# Purpose:
# Derive a project's status from its latest accomplishment and schedule.
#
# Pure functions: entries may be Accomplishment rows or plain dicts
# (legacy import payloads, report context), and "today" is injectable.

from __future__ import annotations

import datetime as dt
from typing import Any, Iterable, Optional

from django.utils import timezone
from django.utils.dateparse import parse_date

from projects.models import ProjectStatus


def entry_value(entry: Any, key: str, default: Any = None) -> Any:
    if isinstance(entry, dict):
        value = entry.get(key, default)
    else:
        value = getattr(entry, key, default)
    return default if value is None else value


def as_date(value: Any) -> Optional[dt.date]:
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    try:
        return parse_date(str(value).strip()[:10])
    except ValueError:
        return None


def latest_accomplishment(entries: Iterable[Any]) -> Any:
    """
    Entry with the greatest date. Ties keep the earliest in list order;
    undated entries only win when nothing is dated.
    """
    latest = None
    latest_date = None
    for entry in entries:
        d = as_date(entry_value(entry, "date")) or dt.date.min
        if latest is None or d > latest_date:
            latest, latest_date = entry, d
    return latest


def derive_status(
    accomplishments: Iterable[Any],
    original_completion: Any,
    revised_completion: Any,
    today: Optional[dt.date] = None,
) -> str:
    latest = latest_accomplishment(accomplishments)
    if latest is not None:
        percent = float(entry_value(latest, "percent", 0) or 0)
        planned = float(entry_value(latest, "planned_percent", 0) or 0)
        if percent >= 100:
            return ProjectStatus.COMPLETED.value
        if percent < planned:
            return ProjectStatus.DELAYED.value

    target = as_date(revised_completion) or as_date(original_completion)
    if target is not None:
        today = today or timezone.localdate()
        if today > target:
            return ProjectStatus.DELAYED.value

    return ProjectStatus.ONGOING.value


def status_matches(status: str, wanted: str) -> bool:
    """
    List filter: "On-going" also matches delayed (still running) projects.
    """
    if not wanted:
        return True
    if wanted == ProjectStatus.ONGOING:
        return status in (ProjectStatus.ONGOING, ProjectStatus.DELAYED)
    return status == wanted
