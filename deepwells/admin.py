# -*- coding: utf-8 -*-
# deepwells/admin.py

from __future__ import annotations

from django.contrib import admin

from .models import Deepwell, MonthlyProduction


class MonthlyProductionInline(admin.TabularInline):
    model = MonthlyProduction
    extra = 0


@admin.register(Deepwell)
class DeepwellAdmin(admin.ModelAdmin):
    list_display = ("name", "provider", "permit", "status", "rated_yield", "average_production", "total_production")
    list_filter = ("provider", "status")
    search_fields = ("name", "permit", "municipality", "legacy_id")
    readonly_fields = ("legacy_id", "average_production", "total_production", "history", "created_at", "updated_at")
    inlines = [MonthlyProductionInline]
