# -*- coding: utf-8 -*-
# reports/services/context.py
# Purpose:
# Flatten a project into the tag -> text mapping used by the inspection
# report template. Blank values render as "n/a".

from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from projects.models import Project
from projects.services.status import derive_status, entry_value, latest_accomplishment

logger = logging.getLogger("dashboard.reports")

NA = "n/a"

PHOTO_TAGS = (
    "ProjectPhoto1",
    "ProjectPhoto2",
    "ProjectPhoto3",
    "Project Photo 1",
    "Project Photo 2",
    "Project Photo 3",
)


def val_or_na(value: Any) -> str:
    if value is None:
        return NA
    if isinstance(value, str):
        return value if value.strip() else NA
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    return str(value)


def peso(amount: Any) -> str:
    if amount is None or str(amount).strip() == "":
        return NA
    try:
        number = Decimal(str(amount))
    except InvalidOperation:
        return NA
    return f"₱{number:,.2f}"


def percent_text(value: Any) -> str:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        number = 0.0
    return f"{number:.2f}%"


def duration_text(original_duration: Any, time_extension: Any) -> str:
    text = f"{original_duration or 0} days"
    if time_extension:
        text += f" +{time_extension}"
    return text


def accomplishment_rows(project: Project, entries: List[Any]) -> List[Dict[str, str]]:
    rows = []
    for acc in entries:
        percent = entry_value(acc, "percent", 0)
        planned = entry_value(acc, "planned_percent", 0)
        variance = entry_value(acc, "variance", None)
        if variance is None:
            variance = float(percent or 0) - float(planned or 0)
        rows.append(
            {
                "date": val_or_na(entry_value(acc, "date")),
                "plannedPercent": percent_text(planned),
                "prevPercent": percent_text(entry_value(acc, "prev_percent", 0)),
                "percent": percent_text(percent),
                "variance": percent_text(variance),
                "activities": val_or_na(entry_value(acc, "activities")),
                "issue": val_or_na(entry_value(acc, "issue") or project.issues),
                "action": val_or_na(entry_value(acc, "action")),
                "remarks": val_or_na(entry_value(acc, "remarks")),
            }
        )
    return rows


def build_report_data(project: Project, *, today: Optional[dt.date] = None) -> Dict[str, Any]:
    entries = list(project.accomplishments.all())
    latest = latest_accomplishment(entries)

    def latest_value(key: str, default: Any = None) -> Any:
        return entry_value(latest, key, default) if latest is not None else default

    percent = latest_value("percent", 0)
    planned = latest_value("planned_percent", 0)
    action = latest_value("action") or None

    return {
        "ProjectName": val_or_na(project.name),
        "ImplementingAgency": val_or_na(project.implementing_agency),
        "Contractor": val_or_na(project.contractor),
        "Location": val_or_na(project.location),
        "ContractAmount": peso(project.contract_amount),
        "RevisedContractAmount": peso(project.revised_contract_amount),
        "Status": derive_status(entries, project.original_completion, project.revised_completion, today=today),
        "NTP": val_or_na(project.ntp_date),
        "Duration": duration_text(project.original_duration, project.time_extension),
        "TargetCompletion": val_or_na(project.revised_completion or project.original_completion),
        "TimeExtension": val_or_na(project.time_extension),
        "OriginalTargetCompletion": val_or_na(project.original_completion),
        "RevisedTargetCompletion": val_or_na(project.revised_completion),
        "PercentToDate": percent_text(percent),
        "PercentPlanned": percent_text(planned),
        "PercentPrevious": percent_text(latest_value("prev_percent", 0)),
        "AsOfDate": val_or_na(latest_value("date")),
        "Issues": val_or_na(project.issues),
        "Issue": val_or_na(project.issues),
        "Actions": val_or_na(action),
        "ActionTaken": val_or_na(action),
        "Remarks": val_or_na(project.remarks),
        "OtherDetails": val_or_na(project.other_details),
        "OtherProjectDetails": val_or_na(project.other_details),
        "Activities": val_or_na(latest_value("activities")),
        "Variance": percent_text(float(percent or 0) - float(planned or 0)),
        "accomplishments": accomplishment_rows(project, entries),
    }


def build_report_images(project: Project) -> Dict[str, bytes]:
    """
    Stored photo bytes keyed by every photo tag spelling.

    A photo that cannot be read is skipped; its drawing renders as "n/a".
    """
    images: Dict[str, bytes] = {}
    for index, photo in enumerate(list(project.photos.all())[:3], start=1):
        try:
            with photo.image.open("rb") as fh:
                data = fh.read()
        except (OSError, ValueError):
            logger.warning("Report photo %s of project %s unreadable", photo.image.name, project.pk, exc_info=True)
            continue
        images[f"ProjectPhoto{index}"] = data
        images[f"Project Photo {index}"] = data
    return images
