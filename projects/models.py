# -*- coding: utf-8 -*-
# projects/models.py

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from uploads.models import project_photo_upload_to


class ProjectStatus(models.TextChoices):
    """
    Derived, never stored. See projects.services.status.derive_status.
    """

    COMPLETED = "Completed", "Completed"
    DELAYED = "Delayed", "Delayed"
    ONGOING = "On-going", "On-going"


class Project(models.Model):
    """
    Infrastructure project under monitoring.

    Progress lives in Accomplishment snapshots; status is computed from the
    latest snapshot and the completion dates on every render.
    """

    legacy_id = models.CharField(max_length=120, unique=True, null=True, blank=True)

    name = models.CharField(max_length=300)
    implementing_agency = models.CharField(max_length=200, blank=True, db_index=True)
    location = models.CharField(max_length=300, blank=True)
    contractor = models.CharField(max_length=300)

    contract_amount = models.DecimalField(max_digits=16, decimal_places=2, default=0)
    revised_contract_amount = models.DecimalField(max_digits=16, decimal_places=2, null=True, blank=True)
    contract_docs_link = models.URLField(max_length=1000, blank=True)

    ntp_date = models.DateField(null=True, blank=True)
    original_duration = models.PositiveIntegerField(default=0, help_text="Days")
    time_extension = models.PositiveIntegerField(default=0, help_text="Days")
    original_completion = models.DateField(null=True, blank=True)
    revised_completion = models.DateField(null=True, blank=True)

    activities = models.TextField(blank=True)
    issues = models.TextField(blank=True)
    remarks = models.TextField(blank=True)
    other_details = models.TextField(blank=True)

    # [{"email": ..., "timestamp": ISO-8601, "action": "create"|"edit"}]
    history = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return self.name

    @property
    def target_completion(self):
        return self.revised_completion or self.original_completion

    @property
    def status(self) -> str:
        from projects.services.status import derive_status

        return derive_status(
            list(self.accomplishments.all()),
            self.original_completion,
            self.revised_completion,
        )


class Accomplishment(models.Model):
    """
    Progress snapshot. percent is cumulative to date.
    Row order (id) is the list order; at most one row per date is kept by
    the upsert in projects.services.progress.
    """

    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="accomplishments")

    date = models.DateField()
    percent = models.FloatField(default=0)
    prev_percent = models.FloatField(default=0)
    planned_percent = models.FloatField(default=0)
    variance = models.FloatField(default=0)

    activities = models.TextField(blank=True)
    issue = models.TextField(blank=True)
    action = models.TextField(blank=True)
    remarks = models.TextField(blank=True)

    class Meta:
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.project_id} @ {self.date}: {self.percent}%"


class BillingEntry(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="billing_entries")

    date = models.DateField()
    amount = models.DecimalField(max_digits=16, decimal_places=2)
    description = models.CharField(max_length=300, blank=True)

    class Meta:
        ordering = ["date", "id"]

    def __str__(self) -> str:
        return f"{self.date} {self.amount}"


class ProjectPhoto(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name="photos")
    slot = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(3)],
    )
    image = models.ImageField(upload_to=project_photo_upload_to)

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["slot", "id"]
        constraints = [
            models.UniqueConstraint(fields=["project", "slot"], name="uniq_project_photo_slot"),
        ]

    def __str__(self) -> str:
        return f"{self.project_id} photo {self.slot}"
