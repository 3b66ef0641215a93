# -*- coding: utf-8 -*-
# deepwells/services/production.py
# Purpose:
# Monthly production rows, derived totals and the MWCI vs MWSI chart.

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from django.db import transaction

from deepwells.models import Deepwell, MonthlyProduction
from projects.services.history import record_edit

logger = logging.getLogger("dashboard.deepwells")

CHART_PROVIDERS = ("MWCI", "MWSI")


def clean_month_rows(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Keep rows with a month and a non-zero production value.
    """
    out = []
    for row in rows or []:
        if not row or row.get("DELETE"):
            continue
        month = (row.get("month") or "").strip()
        try:
            production = float(row.get("production") or 0)
        except (TypeError, ValueError):
            continue
        if not month or production == 0:
            continue
        out.append({"month": month, "production": production})
    return out


def production_stats(values: Iterable[float]) -> Tuple[float, float]:
    """
    (total, average), both rounded to 2 decimals. No rows -> (0, 0).
    """
    values = [float(v) for v in values]
    if not values:
        return 0.0, 0.0
    total = sum(values)
    return round(total, 2), round(total / len(values), 2)


def month_label(ym: str) -> str:
    """
    "2024-01" -> "Jan 2024". Anything unparseable is returned unchanged.
    """
    if not ym or len(ym) < 7:
        return ym or ""
    try:
        year, month = ym.split("-")[:2]
        return f"{calendar.month_abbr[int(month)]} {int(year)}"
    except (ValueError, IndexError):
        return ym


def monthly_chart(rows: Iterable[Tuple[str, str, float]]) -> Dict[str, Any]:
    """
    rows: (provider, month, production). Providers outside MWCI/MWSI are ignored.
    """
    by_provider: Dict[str, Dict[str, float]] = {p: {} for p in CHART_PROVIDERS}
    for provider, month, production in rows:
        key = (provider or "").upper()
        if key not in by_provider or not month:
            continue
        by_provider[key][month] = by_provider[key].get(month, 0.0) + float(production or 0)

    months = sorted(set(by_provider["MWCI"]) | set(by_provider["MWSI"]))
    return {
        "labels": [month_label(m) for m in months],
        "months": months,
        "mwci": [by_provider["MWCI"].get(m, 0) for m in months],
        "mwsi": [by_provider["MWSI"].get(m, 0) for m in months],
        "has_data": bool(months),
    }


def chart_from_db() -> Dict[str, Any]:
    rows = MonthlyProduction.objects.values_list("deepwell__provider", "month", "production")
    return monthly_chart(rows)


@dataclass(frozen=True)
class DeepwellSaveResult:
    deepwell_id: int
    created: bool
    months: int


@transaction.atomic
def save_deepwell(*, deepwell: Deepwell, user, month_rows: Iterable[Dict[str, Any]]) -> DeepwellSaveResult:
    created = deepwell.pk is None
    rows = clean_month_rows(month_rows)
    deepwell.total_production, deepwell.average_production = production_stats(r["production"] for r in rows)
    record_edit(deepwell, user, created=created)
    deepwell.save()

    deepwell.months.all().delete()
    MonthlyProduction.objects.bulk_create(
        [MonthlyProduction(deepwell=deepwell, month=r["month"], production=r["production"]) for r in rows]
    )
    logger.info("Deepwell %s %s (%d months)", deepwell.pk, "created" if created else "updated", len(rows))
    return DeepwellSaveResult(deepwell_id=deepwell.pk, created=created, months=len(rows))
