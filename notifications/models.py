# notifications/models.py
# -*- coding: utf-8 -*-

from django.db import models


class ChangeNotification(models.Model):
    """
    Append-only change log. Pages poll it by id cursor to learn that a list
    they show is stale.
    """

    class Collection(models.TextChoices):
        PROJECTS = "projects", "Projects"
        DEEPWELLS = "deepwells", "Deepwells"
        REFORESTATIONS = "reforestations", "Reforestation activities"
        MESSAGES = "messages", "Messages"

    class ChangeType(models.TextChoices):
        ADDED = "added", "Added"
        MODIFIED = "modified", "Modified"
        REMOVED = "removed", "Removed"

    collection = models.CharField(max_length=30, choices=Collection.choices)
    object_id = models.PositiveBigIntegerField()
    change_type = models.CharField(max_length=10, choices=ChangeType.choices)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["id"]
        indexes = [
            models.Index(fields=["collection", "id"], name="changenotif_coll_id_idx"),
        ]

    def __str__(self) -> str:
        return f"#{self.pk} {self.collection}:{self.object_id} {self.change_type}"
