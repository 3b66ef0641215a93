# -*- coding: utf-8 -*-
# chats/context_processors.py

from __future__ import annotations

from typing import Any, Dict

from accounts.permissions import is_approved_user


def messenger_badge(request) -> Dict[str, Any]:
    user = getattr(request, "user", None)
    if user is None or not is_approved_user(user):
        return {}

    from chats.services.messaging import unread_counts

    return {"chat_unread_total": unread_counts(user).total}
