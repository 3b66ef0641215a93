# -*- coding: utf-8 -*-
# reforestation/admin.py

from __future__ import annotations

from django.contrib import admin

from .models import ReforestationActivity, ReforestationPhoto


class ReforestationPhotoInline(admin.TabularInline):
    model = ReforestationPhoto
    extra = 0
    readonly_fields = ("uploaded_at",)


@admin.register(ReforestationActivity)
class ReforestationActivityAdmin(admin.ModelAdmin):
    list_display = ("activity_name", "activity_type", "location", "status", "trees_planted", "target_area")
    list_filter = ("activity_type", "status")
    search_fields = ("activity_name", "location", "implementing_agency", "legacy_id")
    readonly_fields = ("legacy_id", "history", "created_at", "updated_at")
    inlines = [ReforestationPhotoInline]
