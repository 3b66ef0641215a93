# -*- coding: utf-8 -*-
# chats/services/messaging.py
# Purpose:
# Messenger rules: who sees what, sending, soft delete, admin clear and
# per-thread unread counts.

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import PermissionDenied
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from accounts.permissions import is_approved_user, require_admin
from chats.models import ChatReadState, Message

logger = logging.getLogger("dashboard.chats")

THREAD_ALL = "all"


class ChatError(Exception):
    pass


@dataclass(frozen=True)
class UnreadSummary:
    threads: Dict[str, int]
    total: int


def thread_key(partner=None) -> str:
    return THREAD_ALL if partner is None else str(partner.pk)


def chat_partners(user) -> List:
    """
    Approved, active users other than `user`, ordered by email.
    """
    User = get_user_model()
    qs = User.objects.filter(is_active=True).exclude(pk=user.pk).order_by("email")
    return [u for u in qs if u.can_sign_in]


def resolve_partner(user, thread: Optional[str]):
    """
    "all" (or blank) -> None. Otherwise the approved user with that id.
    Raises ChatError for anything else.
    """
    thread = (thread or THREAD_ALL).strip()
    if thread == THREAD_ALL:
        return None
    try:
        partner_id = int(thread)
    except ValueError:
        raise ChatError(f"Unknown thread: {thread}")

    User = get_user_model()
    partner = User.objects.filter(pk=partner_id, is_active=True).first()
    if partner is None or partner.pk == user.pk or not partner.can_sign_in:
        raise ChatError(f"Unknown thread: {thread}")
    return partner


def visible_messages(user):
    return Message.objects.filter(is_deleted=False).filter(
        Q(recipient__isnull=True) | Q(recipient=user) | Q(sender=user)
    )


def thread_messages(user, partner=None):
    qs = Message.objects.filter(is_deleted=False).select_related("sender")
    if partner is None:
        return qs.filter(recipient__isnull=True)
    return qs.filter(Q(sender=user, recipient=partner) | Q(sender=partner, recipient=user))


def send_message(*, sender, text: str, recipient=None) -> Optional[Message]:
    """
    Returns None when the trimmed text is empty.
    """
    text = (text or "").strip()
    if not text:
        return None
    if not is_approved_user(sender):
        raise PermissionDenied("Your account is pending approval.")
    if recipient is not None and (not recipient.is_active or not recipient.can_sign_in):
        raise ChatError("Recipient is not an approved user.")

    message = Message.objects.create(sender=sender, recipient=recipient, text=text)
    logger.info("Message %s sent by %s to %s", message.pk, sender.pk, thread_key(recipient))
    return message


def soft_delete_message(*, user, message_id: int) -> Message:
    message = visible_messages(user).filter(pk=message_id).first()
    if message is None:
        raise Message.DoesNotExist(f"Message {message_id} not found")
    if message.sender_id != user.pk:
        raise PermissionDenied("You can only delete your own messages.")

    message.is_deleted = True
    message.deleted_by = user
    message.deleted_at = timezone.now()
    message.save(update_fields=["is_deleted", "deleted_by", "deleted_at"])
    logger.info("Message %s deleted by %s", message.pk, user.pk)
    return message


@transaction.atomic
def clear_all_messages(*, user) -> int:
    require_admin(user)
    count, _ = Message.objects.all().delete()
    logger.warning("All messages cleared by %s (%s rows)", user.pk, count)
    return count


def _last_read_map(user) -> Dict[str, object]:
    return {
        state.thread: state.last_read_at
        for state in ChatReadState.objects.filter(user=user)
    }


def unread_counts(user) -> UnreadSummary:
    """
    Incoming visible messages newer than the last read time per thread.
    Threads never opened count from account creation.
    """
    last_read = _last_read_map(user)
    since_default = user.date_joined

    threads: Dict[str, int] = {}
    threads[THREAD_ALL] = (
        Message.objects.filter(is_deleted=False, recipient__isnull=True)
        .exclude(sender=user)
        .filter(created_at__gt=last_read.get(THREAD_ALL, since_default))
        .count()
    )

    incoming = (
        Message.objects.filter(is_deleted=False, recipient=user)
        .values_list("sender_id", "created_at")
    )
    for sender_id, created_at in incoming:
        key = str(sender_id)
        if created_at > last_read.get(key, since_default):
            threads[key] = threads.get(key, 0) + 1

    return UnreadSummary(threads=threads, total=sum(threads.values()))


def mark_read(user, thread: str) -> None:
    ChatReadState.objects.update_or_create(
        user=user,
        thread=thread,
        defaults={"last_read_at": timezone.now()},
    )


def serialize_message(message: Message, *, viewer) -> Dict[str, object]:
    return {
        "id": message.pk,
        "sender_id": message.sender_id,
        "sender": message.sender.email or message.sender.username,
        "text": message.text,
        "created_at": message.created_at.isoformat(),
        "mine": message.sender_id == viewer.pk,
        "broadcast": message.is_broadcast,
    }
