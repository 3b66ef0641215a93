# -*- coding: utf-8 -*-
# projects/services/progress.py
# Purpose:
# Accomplishment snapshots: upsert by date, history display, S-curve data.
#
# Rules:
# - One snapshot per date. Same date overwrites in place, otherwise append.
# - Only the incoming snapshot's variance is (re)computed.
# - History display is newest first with near-duplicates dropped.

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from django.db import transaction
from django.utils import timezone

from projects.models import Accomplishment, Project
from projects.services.status import as_date, entry_value, latest_accomplishment

SNAPSHOT_FIELDS = (
    "date",
    "percent",
    "prev_percent",
    "planned_percent",
    "variance",
    "activities",
    "issue",
    "action",
    "remarks",
)

_DEDUP_FIELDS = (
    "date",
    "percent",
    "prev_percent",
    "planned_percent",
    "activities",
    "issue",
    "action",
    "remarks",
)

_BULLET_SPLIT_RE = re.compile(r"\s*\d+\.\s*|\s*;\s*|\n+")


def compute_variance(percent: Any, planned_percent: Any) -> float:
    return round(float(percent or 0) - float(planned_percent or 0), 2)


def normalise_snapshot(snapshot: Dict[str, Any], *, today: Optional[dt.date] = None) -> Dict[str, Any]:
    out = {k: snapshot.get(k) for k in SNAPSHOT_FIELDS}
    out["date"] = as_date(out["date"]) or today or timezone.localdate()
    for key in ("percent", "prev_percent", "planned_percent"):
        out[key] = float(out[key] or 0)
    for key in ("activities", "issue", "action", "remarks"):
        out[key] = out[key] or ""
    out["variance"] = compute_variance(out["percent"], out["planned_percent"])
    return out


def upsert_accomplishment(entries: List[Dict[str, Any]], snapshot: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Return a new list: the entry sharing the snapshot's date is replaced in
    place, otherwise the snapshot is appended. Other entries are untouched.
    """
    new = normalise_snapshot(snapshot)
    out = list(entries or [])
    for i, entry in enumerate(out):
        if as_date(entry_value(entry, "date")) == new["date"]:
            out[i] = new
            return out
    out.append(new)
    return out


@transaction.atomic
def save_snapshot(project: Project, snapshot: Dict[str, Any]) -> Accomplishment:
    """
    Persist the upsert rule against stored rows (first row with the same date wins).
    """
    data = normalise_snapshot(snapshot)
    row = project.accomplishments.filter(date=data["date"]).order_by("id").first()
    if row is None:
        return Accomplishment.objects.create(project=project, **data)
    for key, value in data.items():
        setattr(row, key, value)
    row.save()
    return row


def bulletize(text: Any) -> List[str]:
    """
    Split activity text on "1." markers, semicolons or newlines.
    One part or fewer returns the original text as a single item.
    """
    text = str(text or "")
    if not text.strip():
        return []
    parts = [p.strip() for p in _BULLET_SPLIT_RE.split(text) if p and p.strip()]
    if len(parts) <= 1:
        return [text]
    return parts


def _sort_key(entry: Any):
    return as_date(entry_value(entry, "date")) or dt.date.min


def dedupe_history(entries: Iterable[Any]) -> List[Any]:
    ordered = sorted(entries, key=_sort_key, reverse=True)
    seen = set()
    out = []
    for entry in ordered:
        key = tuple(
            _dedup_value(entry_value(entry, field, "")) for field in _DEDUP_FIELDS
        )
        if key in seen:
            continue
        seen.add(key)
        out.append(entry)
    return out


def _dedup_value(value: Any) -> Any:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, dt.date):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class HistoryRow:
    date: Optional[dt.date]
    planned_percent: float
    prev_percent: float
    percent: float
    variance: float
    activities: List[str]
    issue: str
    action: str
    remarks: str


def history_rows(entries: Iterable[Any], *, project_issues: str = "") -> List[HistoryRow]:
    rows = []
    for entry in dedupe_history(entries):
        rows.append(
            HistoryRow(
                date=as_date(entry_value(entry, "date")),
                planned_percent=float(entry_value(entry, "planned_percent", 0) or 0),
                prev_percent=float(entry_value(entry, "prev_percent", 0) or 0),
                percent=float(entry_value(entry, "percent", 0) or 0),
                variance=float(entry_value(entry, "variance", 0) or 0),
                activities=bulletize(entry_value(entry, "activities", "")),
                issue=entry_value(entry, "issue", "") or project_issues or "",
                action=entry_value(entry, "action", "") or "",
                remarks=entry_value(entry, "remarks", "") or "",
            )
        )
    return rows


def s_curve_points(entries: Iterable[Any]) -> List[Dict[str, Any]]:
    ordered = sorted(entries, key=_sort_key)
    points = []
    for entry in ordered:
        d = as_date(entry_value(entry, "date"))
        if d is None:
            continue
        points.append(
            {
                "date": d.isoformat(),
                "planned": float(entry_value(entry, "planned_percent", 0) or 0),
                "actual": float(entry_value(entry, "percent", 0) or 0),
            }
        )
    return points


def latest_percent(entries: Iterable[Any]) -> float:
    latest = latest_accomplishment(entries)
    if latest is None:
        return 0.0
    return float(entry_value(latest, "percent", 0) or 0)


def snapshot_initial(project: Optional[Project]) -> Dict[str, Any]:
    """
    Form defaults from the last stored snapshot (list order, not date order).
    """
    last = project.accomplishments.order_by("-id").first() if project and project.pk else None
    if last is None:
        return {"date": None, "percent": 0, "prev_percent": 0, "planned_percent": 0, "action": ""}
    return {
        "date": last.date,
        "percent": last.percent,
        "prev_percent": last.prev_percent if last.prev_percent is not None else last.percent,
        "planned_percent": last.planned_percent,
        "action": last.action,
    }
