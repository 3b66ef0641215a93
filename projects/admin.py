# -*- coding: utf-8 -*-
# projects/admin.py

from __future__ import annotations

from django.contrib import admin

from .models import Accomplishment, BillingEntry, Project, ProjectPhoto


class AccomplishmentInline(admin.TabularInline):
    model = Accomplishment
    extra = 0
    fields = ("date", "percent", "prev_percent", "planned_percent", "variance", "action")
    readonly_fields = ("variance",)


class BillingEntryInline(admin.TabularInline):
    model = BillingEntry
    extra = 0


class ProjectPhotoInline(admin.TabularInline):
    model = ProjectPhoto
    extra = 0
    fields = ("slot", "image", "uploaded_at")
    readonly_fields = ("uploaded_at",)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """
    Raw access for support. Day-to-day editing goes through the dashboard
    form, which also records edit history and applies the snapshot upsert.
    """

    list_display = ("name", "implementing_agency", "contractor", "display_status", "target_completion", "updated_at")
    list_filter = ("implementing_agency",)
    search_fields = ("name", "contractor", "implementing_agency", "legacy_id")
    readonly_fields = ("legacy_id", "history", "created_at", "updated_at")
    inlines = [AccomplishmentInline, BillingEntryInline, ProjectPhotoInline]

    @admin.display(description="Status")
    def display_status(self, obj: Project) -> str:
        return obj.status
