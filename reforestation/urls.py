# -*- coding: utf-8 -*-
# reforestation/urls.py

from __future__ import annotations

from django.urls import path

from . import views

app_name = "reforestation"

urlpatterns = [
    path("", views.activity_list, name="list"),
    path("new/", views.activity_create, name="create"),
    path("<int:activity_id>/", views.activity_detail, name="detail"),
    path("<int:activity_id>/edit/", views.activity_edit, name="edit"),
    path("<int:activity_id>/delete/", views.activity_delete, name="delete"),
]
