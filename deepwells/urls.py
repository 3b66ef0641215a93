# -*- coding: utf-8 -*-
# deepwells/urls.py

from __future__ import annotations

from django.urls import path

from . import views

app_name = "deepwells"

urlpatterns = [
    path("", views.deepwell_list, name="list"),
    path("chart.json", views.deepwell_chart, name="chart"),
    path("new/", views.deepwell_create, name="create"),
    path("<int:deepwell_id>/", views.deepwell_detail, name="detail"),
    path("<int:deepwell_id>/edit/", views.deepwell_edit, name="edit"),
    path("<int:deepwell_id>/delete/", views.deepwell_delete, name="delete"),
]
