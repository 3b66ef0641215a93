# -*- coding: utf-8 -*-
# chats/admin.py

from __future__ import annotations

from django.contrib import admin

from .models import ChatReadState, Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ("id", "sender", "recipient", "created_at", "is_deleted")
    list_filter = ("is_deleted",)
    search_fields = ("text", "sender__email", "recipient__email")
    readonly_fields = ("created_at", "deleted_by", "deleted_at")
    ordering = ("-created_at",)


@admin.register(ChatReadState)
class ChatReadStateAdmin(admin.ModelAdmin):
    list_display = ("user", "thread", "last_read_at")
    search_fields = ("user__email",)
