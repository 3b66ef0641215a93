# -*- coding: utf-8 -*-
# uploads/models.py
# Storage paths for dashboard media. Concrete photo/attachment models live
# in the app that owns them and point their FileFields here.

from __future__ import annotations

import os
from uuid import uuid4


def _safe_name(filename: str, default_ext: str = "") -> str:
    _, ext = os.path.splitext(filename or "")
    return f"{uuid4().hex}{(ext or default_ext).lower()}"


def project_photo_upload_to(instance, filename: str) -> str:
    """
    media/projects/<project_id>/photos/<uuid>.jpg
    """
    return f"projects/{instance.project_id}/photos/{_safe_name(filename, '.jpg')}"


def reforestation_photo_upload_to(instance, filename: str) -> str:
    return f"reforestation/{instance.activity_id}/photos/{_safe_name(filename, '.jpg')}"


def reforestation_kmz_upload_to(instance, filename: str) -> str:
    return f"reforestation/{instance.pk or 'new'}/kmz/{_safe_name(filename, '.kmz')}"
