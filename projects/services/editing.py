# -*- coding: utf-8 -*-
# projects/services/editing.py
# Purpose:
# Save a submitted project form: fields, snapshot upsert, billing rows,
# optional photo replacement and an edit-history entry, in one transaction.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from django.core.files.base import ContentFile
from django.db import transaction

from projects.models import BillingEntry, Project, ProjectPhoto
from projects.services.history import record_edit
from projects.services.progress import save_snapshot
from uploads.services import compress_image, delete_files_on_commit

logger = logging.getLogger("dashboard.projects")

MAX_PHOTOS = 3


@dataclass(frozen=True)
class ProjectSaveResult:
    project_id: int
    created: bool
    photos_replaced: bool
    billing_rows: int


def clean_billing_rows(rows: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Drop rows flagged for deletion or missing a date or an amount.
    """
    out = []
    for row in rows or []:
        if not row or row.get("DELETE"):
            continue
        if not row.get("date") or row.get("amount") in (None, ""):
            continue
        out.append(
            {
                "date": row["date"],
                "amount": row["amount"],
                "description": (row.get("description") or "").strip(),
            }
        )
    return out


def replace_billing(project: Project, rows: Iterable[Dict[str, Any]]) -> int:
    cleaned = clean_billing_rows(rows)
    project.billing_entries.all().delete()
    BillingEntry.objects.bulk_create([BillingEntry(project=project, **row) for row in cleaned])
    return len(cleaned)


def compress_photos(files: Iterable[Any]) -> List[ContentFile]:
    """
    Compress before any DB write so a bad image aborts the whole save.
    Raises uploads.services.ImageProcessingError.
    """
    return [compress_image(f) for f in list(files or [])[:MAX_PHOTOS]]


def replace_photos(project: Project, compressed: List[ContentFile]) -> None:
    old = list(project.photos.all())
    delete_files_on_commit([p.image for p in old])
    project.photos.all().delete()
    for slot, content in enumerate(compressed, start=1):
        photo = ProjectPhoto(project=project, slot=slot)
        photo.image.save(content.name, content, save=False)
        photo.save()


@transaction.atomic
def save_project(
    *,
    project: Project,
    user,
    snapshot: Dict[str, Any],
    billing_rows: Iterable[Dict[str, Any]],
    photos: Optional[List[ContentFile]] = None,
) -> ProjectSaveResult:
    created = project.pk is None
    record_edit(project, user, created=created)
    project.save()

    # Activities / issue / remarks follow the project fields as saved.
    snapshot = {
        **snapshot,
        "activities": project.activities,
        "issue": project.issues,
        "remarks": project.remarks,
    }
    save_snapshot(project, snapshot)
    count = replace_billing(project, billing_rows)

    if photos:
        replace_photos(project, photos)

    logger.info(
        "Project %s %s by %s",
        project.pk,
        "created" if created else "updated",
        getattr(user, "email", ""),
    )
    return ProjectSaveResult(
        project_id=project.pk,
        created=created,
        photos_replaced=bool(photos),
        billing_rows=count,
    )


@transaction.atomic
def delete_project(project: Project) -> None:
    delete_files_on_commit([p.image for p in project.photos.all()])
    pk = project.pk
    project.delete()
    logger.info("Project %s deleted", pk)
