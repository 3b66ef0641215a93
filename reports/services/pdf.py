# -*- coding: utf-8 -*-
# reports/services/pdf.py
# Purpose:
# Convert a generated DOCX to PDF through an external HTTP endpoint
# (Gotenberg / LibreOffice convert route, or any service taking the raw DOCX).

from __future__ import annotations

import logging
import re
from typing import Optional

import requests

from config.services import get_setting

logger = logging.getLogger("dashboard.reports")

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_GOTENBERG_ROUTE_RE = re.compile(r"/forms/libreoffice/convert|/convert/office", re.I)


class PdfConversionError(Exception):
    pass


def is_gotenberg(endpoint: str, endpoint_type: str = "") -> bool:
    if (endpoint_type or "").strip().lower() == "gotenberg":
        return True
    return bool(_GOTENBERG_ROUTE_RE.search(endpoint or ""))


def convert_docx_to_pdf(
    docx_bytes: bytes,
    *,
    endpoint: Optional[str] = None,
    endpoint_type: Optional[str] = None,
    timeout: Optional[float] = None,
) -> bytes:
    endpoint = (endpoint if endpoint is not None else get_setting("pdf_endpoint", "")) or ""
    endpoint = endpoint.strip()
    if not endpoint:
        raise PdfConversionError("DOCX_PDF_ENDPOINT is not configured")

    endpoint_type = endpoint_type if endpoint_type is not None else get_setting("pdf_endpoint_type", "")
    timeout = float(timeout or get_setting("pdf_timeout_seconds", 60) or 60)

    try:
        if is_gotenberg(endpoint, endpoint_type or ""):
            resp = requests.post(
                endpoint,
                files={"files": ("document.docx", docx_bytes, DOCX_CONTENT_TYPE)},
                timeout=timeout,
            )
        else:
            resp = requests.post(
                endpoint,
                data=docx_bytes,
                headers={"Content-Type": DOCX_CONTENT_TYPE},
                timeout=timeout,
            )
    except requests.RequestException as exc:
        raise PdfConversionError(f"PDF conversion request failed: {exc}") from exc

    if not resp.ok:
        raise PdfConversionError(f"PDF conversion failed: {resp.status_code} {resp.reason}")
    if not resp.content:
        raise PdfConversionError("PDF conversion returned an empty response")

    logger.info("Converted DOCX to PDF via %s (%s bytes)", endpoint, len(resp.content))
    return resp.content
