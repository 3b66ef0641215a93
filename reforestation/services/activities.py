# -*- coding: utf-8 -*-
# reforestation/services/activities.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, List, Optional

from django.core.files.base import ContentFile
from django.db import transaction

from projects.services.history import record_edit
from reforestation.models import ReforestationActivity, ReforestationPhoto
from uploads.services import delete_files_on_commit

logger = logging.getLogger("dashboard.reforestation")

KMZ_EXTENSION = ".kmz"


class KmzValidationError(Exception):
    pass


def validate_kmz_name(name: str) -> str:
    base = os.path.basename(name or "")
    if not base.lower().endswith(KMZ_EXTENSION):
        raise KmzValidationError("Only .kmz files are allowed")
    return base


@dataclass(frozen=True)
class ActivitySaveResult:
    activity_id: int
    created: bool
    photos_replaced: bool
    kmz_replaced: bool


def replace_photos(activity: ReforestationActivity, compressed: List[ContentFile]) -> None:
    delete_files_on_commit([p.image for p in activity.photos.all()])
    activity.photos.all().delete()
    for slot, content in enumerate(compressed, start=1):
        photo = ReforestationPhoto(activity=activity, slot=slot)
        photo.image.save(content.name, content, save=False)
        photo.save()


@transaction.atomic
def save_activity(
    *,
    activity: ReforestationActivity,
    user,
    photos: Optional[List[ContentFile]] = None,
    kmz: Any = None,
) -> ActivitySaveResult:
    """
    photos / kmz are only replaced when provided; otherwise stored files stay.
    """
    created = activity.pk is None
    record_edit(activity, user, created=created)
    activity.save()

    if kmz is not None:
        name = validate_kmz_name(getattr(kmz, "name", ""))
        if activity.kmz:
            delete_files_on_commit([activity.kmz])
        activity.kmz.save(name, kmz, save=False)
        activity.kmz_name = name
        activity.save(update_fields=["kmz", "kmz_name", "updated_at"])

    if photos:
        replace_photos(activity, photos)

    logger.info("Reforestation activity %s %s", activity.pk, "created" if created else "updated")
    return ActivitySaveResult(
        activity_id=activity.pk,
        created=created,
        photos_replaced=bool(photos),
        kmz_replaced=kmz is not None,
    )


@transaction.atomic
def delete_activity(activity: ReforestationActivity) -> None:
    files = [p.image for p in activity.photos.all()]
    if activity.kmz:
        files.append(activity.kmz)
    delete_files_on_commit(files)
    pk = activity.pk
    activity.delete()
    logger.info("Reforestation activity %s deleted", pk)
