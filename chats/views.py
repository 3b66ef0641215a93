# -*- coding: utf-8 -*-
# chats/views.py

from __future__ import annotations

from django.contrib import messages
from django.http import Http404, JsonResponse
from django.shortcuts import redirect, render
from django.urls import reverse
from django.views.decorators.http import require_GET, require_POST

from accounts.permissions import approved_required, require_admin
from chats.models import Message
from chats.services.messaging import (
    ChatError,
    chat_partners,
    clear_all_messages,
    mark_read,
    resolve_partner,
    send_message,
    serialize_message,
    soft_delete_message,
    thread_key,
    thread_messages,
    unread_counts,
)


def _partner_or_404(request, thread):
    try:
        return resolve_partner(request.user, thread)
    except ChatError:
        raise Http404("Unknown conversation.")


def _messenger_url(thread: str) -> str:
    return f"{reverse('chats:messenger')}?thread={thread}"


@approved_required
def messenger(request):
    partner = _partner_or_404(request, request.GET.get("thread"))
    thread = thread_key(partner)
    mark_read(request.user, thread)

    return render(
        request,
        "chats/messenger.html",
        {
            "thread": thread,
            "partner": partner,
            "partners": chat_partners(request.user),
            "thread_messages": thread_messages(request.user, partner),
            "unread": unread_counts(request.user),
        },
    )


@require_GET
@approved_required
def poll(request):
    """
    Current thread messages plus unread counts; opening the thread marks it read.
    """
    partner = _partner_or_404(request, request.GET.get("thread"))
    thread = thread_key(partner)
    mark_read(request.user, thread)
    summary = unread_counts(request.user)

    return JsonResponse(
        {
            "thread": thread,
            "messages": [serialize_message(m, viewer=request.user) for m in thread_messages(request.user, partner)],
            "unread": summary.threads,
            "total": summary.total,
        }
    )


@require_GET
@approved_required
def unread(request):
    summary = unread_counts(request.user)
    return JsonResponse({"threads": summary.threads, "total": summary.total})


@require_POST
@approved_required
def send(request):
    thread = request.POST.get("thread") or "all"
    partner = _partner_or_404(request, thread)
    try:
        send_message(sender=request.user, text=request.POST.get("text", ""), recipient=partner)
    except ChatError as exc:
        messages.error(request, str(exc))
    return redirect(_messenger_url(thread_key(partner)))


@require_POST
@approved_required
def delete(request, message_id: int):
    try:
        message = soft_delete_message(user=request.user, message_id=message_id)
    except Message.DoesNotExist:
        raise Http404("Message not found.")
    return redirect(_messenger_url(thread_key(message.recipient)))


@require_POST
@approved_required
def clear(request):
    require_admin(request.user)
    count = clear_all_messages(user=request.user)
    messages.success(request, f"Cleared {count} message(s).")
    return redirect("chats:messenger")
