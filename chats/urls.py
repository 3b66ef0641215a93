# -*- coding: utf-8 -*-
# chats/urls.py

from __future__ import annotations

from django.urls import path

from . import views

app_name = "chats"

urlpatterns = [
    path("", views.messenger, name="messenger"),
    path("poll/", views.poll, name="poll"),
    path("unread/", views.unread, name="unread"),
    path("send/", views.send, name="send"),
    path("clear/", views.clear, name="clear"),
    path("<int:message_id>/delete/", views.delete, name="delete"),
]
