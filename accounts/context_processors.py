# -*- coding: utf-8 -*-
# accounts/context_processors.py

from __future__ import annotations

from typing import Any, Dict

from accounts.permissions import can_delete, can_edit, is_admin, is_view_only


def access_flags(request) -> Dict[str, Any]:
    user = getattr(request, "user", None)
    if user is None:
        return {}
    return {
        "can_edit": can_edit(user),
        "can_delete": can_delete(user),
        "is_site_admin": is_admin(user),
        "view_only": is_view_only(request),
    }


def pending_users_badge(request) -> Dict[str, Any]:
    user = getattr(request, "user", None)
    if user is None or not is_admin(user):
        return {}

    from accounts.services.approval import pending_users

    return {"pending_users_count": pending_users().count()}
