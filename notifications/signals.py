# -*- coding: utf-8 -*-
# notifications/signals.py

from __future__ import annotations

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from notifications.models import ChangeNotification
from notifications.services.changes import ADDED, MODIFIED, REMOVED, record_change

Collection = ChangeNotification.Collection

_TRACKED = {
    "projects.Project": Collection.PROJECTS,
    "deepwells.Deepwell": Collection.DEEPWELLS,
    "reforestation.ReforestationActivity": Collection.REFORESTATIONS,
}


def _connect(sender_label: str, collection: str) -> None:
    def _saved(sender, instance, created: bool, raw: bool = False, **kwargs) -> None:
        if raw:
            return
        record_change(collection, instance.pk, ADDED if created else MODIFIED)

    def _deleted(sender, instance, **kwargs) -> None:
        record_change(collection, instance.pk, REMOVED)

    post_save.connect(_saved, sender=sender_label, weak=False, dispatch_uid=f"changes:save:{sender_label}")
    post_delete.connect(_deleted, sender=sender_label, weak=False, dispatch_uid=f"changes:delete:{sender_label}")


for _label, _collection in _TRACKED.items():
    _connect(_label, _collection)


@receiver(post_save, sender="chats.Message", dispatch_uid="changes:save:chats.Message")
def message_saved(sender, instance, created: bool, raw: bool = False, **kwargs) -> None:
    if raw:
        return
    if instance.is_deleted:
        # Soft delete is a removal as far as readers are concerned.
        record_change(Collection.MESSAGES, instance.pk, REMOVED)
    else:
        record_change(Collection.MESSAGES, instance.pk, ADDED if created else MODIFIED)


@receiver(post_delete, sender="chats.Message", dispatch_uid="changes:delete:chats.Message")
def message_deleted(sender, instance, **kwargs) -> None:
    record_change(Collection.MESSAGES, instance.pk, REMOVED)
