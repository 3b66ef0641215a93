# -*- coding: utf-8 -*-
# notifications/admin.py

from django.contrib import admin

from .models import ChangeNotification


@admin.register(ChangeNotification)
class ChangeNotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "collection", "object_id", "change_type", "created_at")
    list_filter = ("collection", "change_type")
    search_fields = ("object_id",)
    readonly_fields = ("collection", "object_id", "change_type", "created_at")
