# -*- coding: utf-8 -*-
# reports/services/export.py

from __future__ import annotations

import re
from dataclasses import dataclass

from projects.models import Project
from reports.services.context import build_report_data, build_report_images
from reports.services.docx_render import find_template, render_docx
from reports.services.pdf import DOCX_CONTENT_TYPE, convert_docx_to_pdf

DEFAULT_FILENAME = "site_inspection_report"

_UNSAFE_FILENAME_RE = re.compile(r"[^a-z0-9\- _()+]", re.I)


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    content: bytes
    content_type: str


def report_filename(name: str, extension: str) -> str:
    base = _UNSAFE_FILENAME_RE.sub("_", name or "") or DEFAULT_FILENAME
    return f"{base}.{extension}"


def build_project_docx(project: Project) -> ExportedFile:
    """
    Raises ReportTemplateError when no template file is available.
    """
    content = render_docx(find_template(), build_report_data(project), build_report_images(project))
    return ExportedFile(
        filename=report_filename(project.name, "docx"),
        content=content,
        content_type=DOCX_CONTENT_TYPE,
    )


def build_project_pdf(project: Project, docx: ExportedFile | None = None) -> ExportedFile:
    """
    Raises PdfConversionError; callers fall back to the DOCX.
    """
    docx = docx or build_project_docx(project)
    return ExportedFile(
        filename=report_filename(project.name, "pdf"),
        content=convert_docx_to_pdf(docx.content),
        content_type="application/pdf",
    )
