# -*- coding: utf-8 -*-
# projects/services/legacy_import.py
# Purpose:
# Import documents from the previous document store (camelCase fields,
# nested lists, photos and KMZ files as data URLs).
#
# Rules:
# - One transaction for the whole import.
# - Idempotent: rows are matched on legacy_id (the document id).
# - Nested lists (accomplishments, billing, months, photos) are replaced.
# - A photo that cannot be decoded is skipped with a warning.

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from django.core.files.base import ContentFile
from django.db import transaction

from deepwells.models import Deepwell, MonthlyProduction
from deepwells.services.production import clean_month_rows, production_stats
from projects.models import Accomplishment, Project
from projects.services.editing import replace_billing
from projects.services.editing import replace_photos as replace_project_photos
from projects.services.progress import compute_variance
from projects.services.status import as_date
from reforestation.models import ReforestationActivity
from reforestation.services.activities import KmzValidationError, validate_kmz_name
from reforestation.services.activities import replace_photos as replace_activity_photos
from uploads.services import ImageProcessingError, compress_image, decode_data_url

logger = logging.getLogger("dashboard.imports")

COLLECTIONS = ("projects", "deepwells", "reforestations")
MAX_PHOTOS = 3


class LegacyImportError(Exception):
    pass


@dataclass
class CollectionSummary:
    created: int = 0
    updated: int = 0
    photos: int = 0
    skipped_photos: int = 0


@dataclass
class ImportSummary:
    collections: Dict[str, CollectionSummary] = field(
        default_factory=lambda: {name: CollectionSummary() for name in COLLECTIONS}
    )

    def line(self, name: str) -> str:
        s = self.collections[name]
        return f"{name}: {s.created} created, {s.updated} updated, {s.photos} photos ({s.skipped_photos} skipped)"


# --------------------------------------------------
# Sources
# --------------------------------------------------

def _documents(raw: Any, collection: str) -> List[Dict[str, Any]]:
    """
    Accept a list of documents (each with "id") or an {id: document} mapping.
    """
    if raw is None:
        return []
    if isinstance(raw, dict):
        return [{**(doc or {}), "id": str(doc_id)} for doc_id, doc in raw.items()]
    if isinstance(raw, list):
        out = []
        for doc in raw:
            if not isinstance(doc, dict) or not str(doc.get("id") or "").strip():
                raise LegacyImportError(f"{collection}: every document needs an id")
            out.append({**doc, "id": str(doc["id"]).strip()})
        return out
    raise LegacyImportError(f"{collection}: expected a list or an object")


def load_json_dump(path) -> Dict[str, List[Dict[str, Any]]]:
    try:
        payload = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise LegacyImportError(f"Could not read {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise LegacyImportError("Dump must be an object keyed by collection name")
    return {name: _documents(payload.get(name), name) for name in COLLECTIONS}


def load_firestore(project_id: str) -> Dict[str, List[Dict[str, Any]]]:
    """
    Read the three collections with google-cloud-firestore (install the
    "firestore" extra). Credentials come from the usual Google ADC chain.
    """
    from google.cloud import firestore

    client = firestore.Client(project=project_id)
    out: Dict[str, List[Dict[str, Any]]] = {}
    for name in COLLECTIONS:
        out[name] = [{**(snap.to_dict() or {}), "id": snap.id} for snap in client.collection(name).stream()]
        logger.info("Read %s %s documents from Firestore", len(out[name]), name)
    return out


# --------------------------------------------------
# Field coercion
# --------------------------------------------------

def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _int(value: Any, default: int = 0) -> int:
    try:
        return max(int(float(value)), 0)
    except (TypeError, ValueError):
        return default


def _decimal(value: Any) -> Optional[Decimal]:
    if value is None or _text(value) == "":
        return None
    try:
        return Decimal(_text(value).replace(",", ""))
    except InvalidOperation:
        return None


def _history(value: Any) -> List[Dict[str, Any]]:
    out = []
    for entry in value or []:
        if isinstance(entry, dict):
            out.append(
                {
                    "email": _text(entry.get("email")),
                    "timestamp": _text(entry.get("timestamp")),
                    "action": _text(entry.get("action")) or "edit",
                }
            )
    return out


def _photo_files(values: Iterable[Any], summary: CollectionSummary, label: str) -> List[ContentFile]:
    files = []
    for index, value in enumerate([v for v in values if v][:MAX_PHOTOS], start=1):
        try:
            _, data = decode_data_url(str(value))
            files.append(compress_image(ContentFile(data, name=f"legacy-{index}.png")))
        except ImageProcessingError as exc:
            summary.skipped_photos += 1
            logger.warning("Skipped photo %s of %s: %s", index, label, exc)
    summary.photos += len(files)
    return files


def _count(summary: CollectionSummary, created: bool) -> None:
    if created:
        summary.created += 1
    else:
        summary.updated += 1


# --------------------------------------------------
# Collections
# --------------------------------------------------

def import_project(doc: Dict[str, Any], summary: CollectionSummary) -> Project:
    contract_amount = _decimal(doc.get("contractAmount"))
    project, created = Project.objects.update_or_create(
        legacy_id=doc["id"],
        defaults={
            "name": _text(doc.get("name")) or f"Project {doc['id']}",
            "implementing_agency": _text(doc.get("implementingAgency")),
            "location": _text(doc.get("location")),
            "contractor": _text(doc.get("contractor")),
            "contract_amount": contract_amount if contract_amount is not None else Decimal("0"),
            "revised_contract_amount": _decimal(doc.get("revisedContractAmount")),
            "contract_docs_link": _text(doc.get("contractDocsLink")),
            "ntp_date": as_date(doc.get("ntpDate")),
            "original_duration": _int(doc.get("originalDuration")),
            "time_extension": _int(doc.get("timeExtension")),
            "original_completion": as_date(doc.get("originalCompletion")),
            "revised_completion": as_date(doc.get("revisedCompletion")),
            "activities": _text(doc.get("activities")),
            "issues": _text(doc.get("issues")),
            "remarks": _text(doc.get("remarks")),
            "other_details": _text(doc.get("otherDetails")),
            "history": _history(doc.get("history")),
        },
    )
    _count(summary, created)

    project.accomplishments.all().delete()
    rows = []
    for acc in doc.get("accomplishments") or []:
        date = as_date((acc or {}).get("date"))
        if date is None:
            continue
        percent = _float(acc.get("percent"))
        planned = _float(acc.get("plannedPercent"))
        variance = acc.get("variance")
        rows.append(
            Accomplishment(
                project=project,
                date=date,
                percent=percent,
                prev_percent=_float(acc.get("prevPercent")),
                planned_percent=planned,
                variance=_float(variance) if variance not in (None, "") else compute_variance(percent, planned),
                activities=_text(acc.get("activities")),
                issue=_text(acc.get("issue")),
                action=_text(acc.get("action")),
                remarks=_text(acc.get("remarks")),
            )
        )
    Accomplishment.objects.bulk_create(rows)

    replace_billing(
        project,
        [
            {
                "date": as_date((row or {}).get("date")),
                "amount": _decimal((row or {}).get("amount")),
                "description": _text((row or {}).get("desc")),
            }
            for row in doc.get("progressBilling") or []
        ],
    )

    photos = doc.get("photos") or ([doc["sCurveDataUrl"]] if doc.get("sCurveDataUrl") else [])
    files = _photo_files(photos, summary, f"project {doc['id']}")
    if files:
        replace_project_photos(project, files)
    return project


def import_deepwell(doc: Dict[str, Any], summary: CollectionSummary) -> Deepwell:
    months = clean_month_rows(
        [{"month": _text((m or {}).get("month")), "production": (m or {}).get("prod")} for m in doc.get("months") or []]
    )
    total, average = production_stats([m["production"] for m in months])

    deepwell, created = Deepwell.objects.update_or_create(
        legacy_id=doc["id"],
        defaults={
            "name": _text(doc.get("name")) or f"Deepwell {doc['id']}",
            "provider": _text(doc.get("provider")).upper(),
            "permit": _text(doc.get("permit")),
            "status": _text(doc.get("status")),
            "rated_yield": _float(doc.get("ratedYield")),
            "location": _text(doc.get("location")),
            "municipality": _text(doc.get("municipality")),
            "total_production": total,
            "average_production": average,
            "history": _history(doc.get("history")),
        },
    )
    _count(summary, created)

    deepwell.months.all().delete()
    MonthlyProduction.objects.bulk_create([MonthlyProduction(deepwell=deepwell, **m) for m in months])
    return deepwell


def import_reforestation(doc: Dict[str, Any], summary: CollectionSummary) -> ReforestationActivity:
    activity, created = ReforestationActivity.objects.update_or_create(
        legacy_id=doc["id"],
        defaults={
            "activity_name": _text(doc.get("activityName")) or f"Activity {doc['id']}",
            "activity_type": _text(doc.get("activityType")),
            "location": _text(doc.get("location")),
            "implementing_agency": _text(doc.get("implementingAgency")),
            "status": _text(doc.get("activityStatus") or doc.get("status")),
            "start_date": as_date(doc.get("startDate")),
            "target_date": as_date(doc.get("targetDate")),
            "target_area": _float(doc.get("targetArea")),
            "trees_planted": _int(doc.get("treesPlanted")),
            "tree_species": _text(doc.get("treeSpecies")),
            "budget": _decimal(doc.get("budget")) or Decimal("0"),
            "initial_survival_rate": _float(doc.get("initialSurvivalRate")),
            "initial_survival_date": as_date(doc.get("initialSurvivalDate")),
            "final_survival_rate": _float(doc.get("finalSurvivalRate")),
            "final_survival_date": as_date(doc.get("finalSurvivalDate")),
            "description": _text(doc.get("description")),
            "remarks": _text(doc.get("remarksReforestation") or doc.get("remarks")),
            "history": _history(doc.get("history")),
        },
    )
    _count(summary, created)

    kmz_name = _text(doc.get("kmzName"))
    kmz_data = doc.get("kmzDataUrl")
    if kmz_name and kmz_data:
        try:
            name = validate_kmz_name(kmz_name)
            _, data = decode_data_url(str(kmz_data))
        except (KmzValidationError, ImageProcessingError) as exc:
            logger.warning("Skipped KMZ of activity %s: %s", doc["id"], exc)
        else:
            activity.kmz.save(name, ContentFile(data), save=False)
            activity.kmz_name = name
            activity.save(update_fields=["kmz", "kmz_name", "updated_at"])

    files = _photo_files(doc.get("photos") or [], summary, f"activity {doc['id']}")
    if files:
        replace_activity_photos(activity, files)
    return activity


_IMPORTERS: Dict[str, Callable[[Dict[str, Any], CollectionSummary], Any]] = {
    "projects": import_project,
    "deepwells": import_deepwell,
    "reforestations": import_reforestation,
}


@transaction.atomic
def import_documents(source: Dict[str, Any], *, only: Optional[Iterable[str]] = None) -> ImportSummary:
    wanted = list(only or COLLECTIONS)
    unknown = [name for name in wanted if name not in COLLECTIONS]
    if unknown:
        raise LegacyImportError(f"Unknown collection(s): {', '.join(unknown)}")

    summary = ImportSummary()
    for name in wanted:
        importer = _IMPORTERS[name]
        for doc in _documents(source.get(name), name):
            importer(doc, summary.collections[name])
        logger.info("Legacy import %s", summary.line(name))
    return summary
