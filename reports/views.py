# -*- coding: utf-8 -*-
# reports/views.py

from __future__ import annotations

import logging

from django.contrib import messages
from django.http import HttpResponse
from django.shortcuts import get_object_or_404, redirect
from django.views.decorators.http import require_GET

from accounts.permissions import approved_required
from projects.models import Project
from reports.services.docx_render import ReportTemplateError
from reports.services.export import ExportedFile, build_project_docx, build_project_pdf
from reports.services.pdf import PdfConversionError

logger = logging.getLogger("dashboard.reports")


def _download(exported: ExportedFile) -> HttpResponse:
    resp = HttpResponse(exported.content, content_type=exported.content_type)
    resp["Content-Disposition"] = f'attachment; filename="{exported.filename}"'
    return resp


def _load_project(project_id: int) -> Project:
    return get_object_or_404(
        Project.objects.prefetch_related("accomplishments", "photos"),
        pk=project_id,
    )


@require_GET
@approved_required
def project_docx(request, project_id: int):
    project = _load_project(project_id)
    try:
        exported = build_project_docx(project)
    except ReportTemplateError as exc:
        logger.error("DOCX export failed for project %s: %s", project.pk, exc)
        messages.error(request, f"Export failed: {exc}")
        return redirect("projects:detail", project_id=project.pk)
    return _download(exported)


@require_GET
@approved_required
def project_pdf(request, project_id: int):
    project = _load_project(project_id)
    try:
        docx = build_project_docx(project)
    except ReportTemplateError as exc:
        logger.error("PDF export failed for project %s: %s", project.pk, exc)
        messages.error(request, f"Export failed: {exc}")
        return redirect("projects:detail", project_id=project.pk)

    try:
        return _download(build_project_pdf(project, docx))
    except PdfConversionError as exc:
        logger.warning("PDF conversion failed for project %s: %s", project.pk, exc)
        messages.warning(request, f"PDF conversion failed ({exc}). Downloaded DOCX instead.")
        return _download(docx)
