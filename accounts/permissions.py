# -*- coding: utf-8 -*-
# accounts/permissions.py
# Purpose:
# Access rules shared by every app.
#
# Levels (lowest to highest):
# - view-only visitor (anonymous, session flag, list pages only)
# - approved user, level 1 (create / edit)
# - elevated user: level 2 or site admin (delete projects/deepwells, contract docs)
# - site admin (user management, reforestation delete, chat clear)

from __future__ import annotations

from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.core.exceptions import PermissionDenied

VIEW_ONLY_SESSION_KEY = "dashboard_view_only"


def is_approved_user(user) -> bool:
    return bool(getattr(user, "is_authenticated", False) and getattr(user, "can_sign_in", False))


def is_view_only(request) -> bool:
    if is_approved_user(request.user):
        return False
    return bool(request.session.get(VIEW_ONLY_SESSION_KEY))


def can_edit(user) -> bool:
    return is_approved_user(user)


def can_delete(user) -> bool:
    return is_approved_user(user) and user.has_elevated_access


def is_admin(user) -> bool:
    return is_approved_user(user) and user.is_site_admin


def browse_required(view_func):
    """
    List pages: approved users or view-only visitors.
    """
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if is_approved_user(request.user) or is_view_only(request):
            return view_func(request, *args, **kwargs)
        return redirect_to_login(request.get_full_path())

    return _wrapped


def approved_required(view_func):
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        if not getattr(request.user, "is_authenticated", False):
            return redirect_to_login(request.get_full_path())
        if not is_approved_user(request.user):
            raise PermissionDenied("Your account is pending approval.")
        return view_func(request, *args, **kwargs)

    return _wrapped


def require_elevated(user) -> None:
    if not can_delete(user):
        raise PermissionDenied("Only admin or level 2 users can do this.")


def require_admin(user) -> None:
    if not is_admin(user):
        raise PermissionDenied("Only the admin can do this.")
