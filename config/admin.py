# -*- coding: utf-8 -*-
# config/admin.py

from django.contrib import admin

from .models import SiteSetting


@admin.register(SiteSetting)
class SiteSettingAdmin(admin.ModelAdmin):
    """
    Runtime overrides. A row wins over the environment-derived setting.
    """

    list_display = ("key", "value", "note", "updated_by", "updated_at")
    search_fields = ("key", "note")
    readonly_fields = ("updated_by", "updated_at")

    fieldsets = (
        (None, {
            "fields": ("key", "value", "note"),
        }),
        ("Audit", {
            "fields": ("updated_by", "updated_at"),
        }),
    )

    def save_model(self, request, obj, form, change):
        obj.updated_by = request.user
        super().save_model(request, obj, form, change)
