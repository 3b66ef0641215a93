# -*- coding: utf-8 -*-
# uploads/services.py
# Purpose:
# Image handling shared by project and reforestation photos.
#
# - compress_image: downscale to a bounded longest side, re-encode as JPEG
# - decode_data_url: "data:image/png;base64,..." -> (mime, bytes)
# - to_png_bytes: used by the report exporter for embedded pictures

from __future__ import annotations

import base64
import binascii
import io
import logging
import os
import re

from django.conf import settings
from django.core.files.base import ContentFile
from django.db import transaction
from PIL import Image, ImageOps, UnidentifiedImageError

logger = logging.getLogger("dashboard.uploads")

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w/+.-]+)?(?P<b64>;base64)?,(?P<data>.*)$", re.DOTALL)


class ImageProcessingError(Exception):
    pass


def _open_image(data: bytes) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise ImageProcessingError(f"Not a readable image: {exc}") from exc
    return ImageOps.exif_transpose(img)


def _flatten_to_rgb(img: Image.Image) -> Image.Image:
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        bg = Image.new("RGB", rgba.size, (255, 255, 255))
        bg.paste(rgba, mask=rgba.split()[-1])
        return bg
    if img.mode != "RGB":
        return img.convert("RGB")
    return img


def compress_image_bytes(data: bytes, *, max_size: int | None = None, quality: int | None = None) -> bytes:
    max_size = int(max_size or getattr(settings, "PHOTO_MAX_DIMENSION", 1024))
    quality = int(quality or getattr(settings, "PHOTO_JPEG_QUALITY", 75))

    img = _flatten_to_rgb(_open_image(data))
    if max(img.size) > max_size:
        img.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

    out = io.BytesIO()
    img.save(out, format="JPEG", quality=quality, optimize=True)
    return out.getvalue()


def compress_image(uploaded, *, max_size: int | None = None, quality: int | None = None) -> ContentFile:
    """
    Read an uploaded file and return a JPEG ContentFile named <stem>.jpg.
    """
    name = getattr(uploaded, "name", "") or "photo"
    if hasattr(uploaded, "seek"):
        uploaded.seek(0)
    data = uploaded.read()
    jpeg = compress_image_bytes(data, max_size=max_size, quality=quality)
    stem = os.path.splitext(os.path.basename(name))[0] or "photo"
    logger.debug("Compressed %s: %d -> %d bytes", name, len(data), len(jpeg))
    return ContentFile(jpeg, name=f"{stem}.jpg")


def decode_data_url(value: str) -> tuple[str, bytes]:
    m = _DATA_URL_RE.match((value or "").strip())
    if not m:
        raise ImageProcessingError("Not a data URL.")
    mime = m.group("mime") or "application/octet-stream"
    payload = m.group("data")
    if m.group("b64"):
        try:
            return mime, base64.b64decode(payload, validate=False)
        except (binascii.Error, ValueError) as exc:
            raise ImageProcessingError(f"Bad base64 payload: {exc}") from exc
    return mime, payload.encode("utf-8")


def to_png_bytes(data: bytes) -> bytes:
    img = _open_image(data)
    if img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA")
    out = io.BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


def delete_files_on_commit(files) -> None:
    """
    Remove stored files once the surrounding transaction commits.
    """
    targets = [(f.storage, f.name) for f in files if f and f.name]

    def _delete():
        for storage, name in targets:
            storage.delete(name)

    transaction.on_commit(_delete)
