# -*- coding: utf-8 -*-
# notifications/services/changes.py
# Purpose:
# Record, read and collapse change events for the polling feed.
#
# Collapse rules (per collection + object id, in arrival order):
# - added, then modified   -> added
# - added ... removed      -> nothing
# - modified ... removed   -> removed
# - removed, then added    -> modified
# - otherwise the latest type wins

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from django.db import DatabaseError, transaction
from django.db.models import Max

from notifications.models import ChangeNotification

logger = logging.getLogger("dashboard.notifications")

ADDED = ChangeNotification.ChangeType.ADDED.value
MODIFIED = ChangeNotification.ChangeType.MODIFIED.value
REMOVED = ChangeNotification.ChangeType.REMOVED.value

DEFAULT_LIMIT = 500


def record_change(collection: str, object_id: int, change_type: str) -> Optional[ChangeNotification]:
    """
    Best-effort: a failure is logged and never breaks the caller's write.
    """
    try:
        with transaction.atomic():
            return ChangeNotification.objects.create(
                collection=collection,
                object_id=object_id,
                change_type=change_type,
            )
    except DatabaseError:
        logger.warning(
            "Could not record change %s %s:%s", change_type, collection, object_id, exc_info=True
        )
        return None


def latest_cursor() -> int:
    return ChangeNotification.objects.aggregate(m=Max("id"))["m"] or 0


def changes_since(
    cursor: int,
    collections: Optional[Sequence[str]] = None,
    *,
    limit: int = DEFAULT_LIMIT,
) -> List[ChangeNotification]:
    qs = ChangeNotification.objects.filter(id__gt=int(cursor or 0))
    if collections:
        qs = qs.filter(collection__in=list(collections))
    return list(qs.order_by("id")[:limit])


def _net(prev: Optional[str], new: str) -> Optional[str]:
    if prev == ADDED:
        if new == REMOVED:
            return None
        return ADDED
    if prev == MODIFIED and new == REMOVED:
        return REMOVED
    if prev == REMOVED and new == ADDED:
        return MODIFIED
    return new


def _event_parts(event: Any):
    if isinstance(event, dict):
        return event["collection"], event["object_id"], event["change_type"]
    return event.collection, event.object_id, event.change_type


def collapse_changes(events: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Reduce events to one net change per document, in first-seen order.
    """
    state: Dict[tuple, Optional[str]] = {}
    seen = {}
    for event in events:
        collection, object_id, change_type = _event_parts(event)
        key = (collection, object_id)
        seen.setdefault(key, len(seen))
        state[key] = _net(state.get(key), change_type)

    ordered = sorted(state.items(), key=lambda kv: seen[kv[0]])
    return [
        {"collection": collection, "id": object_id, "type": net}
        for (collection, object_id), net in ordered
        if net is not None
    ]
