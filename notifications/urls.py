# -*- coding: utf-8 -*-
# notifications/urls.py

from __future__ import annotations

from django.urls import path

from . import views

app_name = "notifications"

urlpatterns = [
    path("changes/", views.changes, name="changes"),
]
