# -*- coding: utf-8 -*-
# reports/urls.py

from __future__ import annotations

from django.urls import path

from . import views

app_name = "reports"

urlpatterns = [
    path("projects/<int:project_id>/report.docx", views.project_docx, name="project_docx"),
    path("projects/<int:project_id>/report.pdf", views.project_pdf, name="project_pdf"),
]
