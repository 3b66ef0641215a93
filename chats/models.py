# -*- coding: utf-8 -*-
# chats/models.py

from __future__ import annotations

from django.conf import settings
from django.db import models


class Message(models.Model):
    """
    Messenger message. recipient=None means General Chat (broadcast).
    Deletion by the sender is soft; only the admin "clear all" removes rows.
    """

    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="sent_messages",
    )
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="received_messages",
    )
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    is_deleted = models.BooleanField(default=False)
    deleted_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    deleted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["created_at", "id"]

    @property
    def is_broadcast(self) -> bool:
        return self.recipient_id is None

    def __str__(self) -> str:
        return f"{self.sender} -> {self.recipient or 'General Chat'}: {self.text[:40]}"


class ChatReadState(models.Model):
    """
    Last time a user opened a thread. thread is "all" or the other user's id.
    """

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_read_states",
    )
    thread = models.CharField(max_length=32)
    last_read_at = models.DateTimeField()

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["user", "thread"], name="uniq_chat_read_state"),
        ]

    def __str__(self) -> str:
        return f"{self.user} read {self.thread} at {self.last_read_at:%Y-%m-%d %H:%M}"
