# -*- coding: utf-8 -*-
# notifications/views.py

from __future__ import annotations

from django.http import JsonResponse
from django.views.decorators.http import require_GET

from accounts.permissions import browse_required, is_approved_user
from notifications.models import ChangeNotification
from notifications.services.changes import changes_since, collapse_changes, latest_cursor

_PUBLIC_COLLECTIONS = {
    ChangeNotification.Collection.PROJECTS.value,
    ChangeNotification.Collection.DEEPWELLS.value,
    ChangeNotification.Collection.REFORESTATIONS.value,
}


@require_GET
@browse_required
def changes(request):
    """
    Poll feed: {"cursor": <int>, "changes": [{"collection", "id", "type"}, ...]}

    Without a cursor the caller only learns the current cursor.
    """
    allowed = set(_PUBLIC_COLLECTIONS)
    if is_approved_user(request.user):
        allowed.add(ChangeNotification.Collection.MESSAGES.value)

    requested = [c.strip() for c in (request.GET.get("collections") or "").split(",") if c.strip()]
    collections = [c for c in requested if c in allowed] if requested else sorted(allowed)

    raw_cursor = (request.GET.get("cursor") or "").strip()
    if not raw_cursor:
        return JsonResponse({"cursor": latest_cursor(), "changes": []})

    try:
        cursor = max(int(raw_cursor), 0)
    except ValueError:
        return JsonResponse({"error": "cursor must be an integer"}, status=400)

    if not collections:
        return JsonResponse({"cursor": cursor, "changes": []})

    events = changes_since(cursor, collections)
    new_cursor = events[-1].pk if events else cursor
    return JsonResponse({"cursor": new_cursor, "changes": collapse_changes(events)})
