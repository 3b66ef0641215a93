# -*- coding: utf-8 -*-
# projects/services/history.py
# Edit history entries shared by projects, deepwells and reforestation.

from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from django.utils import timezone
from django.utils.dateparse import parse_datetime

ACTION_CREATE = "create"
ACTION_EDIT = "edit"

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def history_entry(email: str, action: str, when=None) -> Dict[str, str]:
    when = when or timezone.now()
    return {"email": email or "", "timestamp": when.isoformat(), "action": action}


def append_history(history: Optional[List[Dict[str, Any]]], email: str, action: str, when=None) -> List[Dict[str, Any]]:
    """
    Return a new list with one entry appended. The input is not mutated.
    """
    out = list(history or [])
    out.append(history_entry(email, action, when))
    return out


def record_edit(instance, user, *, created: bool) -> None:
    """
    Append to instance.history before save. Caller saves.
    """
    email = getattr(user, "email", "") or getattr(user, "username", "") or ""
    instance.history = append_history(
        instance.history,
        email,
        ACTION_CREATE if created else ACTION_EDIT,
    )


def _ts_key(entry: Dict[str, Any]):
    parsed = parse_datetime(str(entry.get("timestamp") or ""))
    if parsed is None:
        return (0, _EPOCH)
    if timezone.is_naive(parsed):
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return (1, parsed)


def sorted_history(history: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """
    Newest first; entries with unreadable timestamps sink to the bottom.
    """
    rows = []
    for entry in history or []:
        if not isinstance(entry, dict):
            continue
        row = dict(entry)
        row["when"] = parse_datetime(str(entry.get("timestamp") or ""))
        rows.append(row)
    return sorted(rows, key=_ts_key, reverse=True)
