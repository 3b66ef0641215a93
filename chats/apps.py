# -*- coding: utf-8 -*-
# chats/apps.py

from __future__ import annotations

from django.apps import AppConfig


class ChatsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "chats"
    verbose_name = "Messenger"
