# -*- coding: utf-8 -*-
# reforestation/models.py

from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from uploads.models import reforestation_kmz_upload_to, reforestation_photo_upload_to


class ReforestationActivity(models.Model):
    """
    Tree-planting activity. Type and status are free text; the list filters
    offer whatever values are stored.
    """

    legacy_id = models.CharField(max_length=120, unique=True, null=True, blank=True)

    activity_name = models.CharField(max_length=300)
    activity_type = models.CharField(max_length=120, blank=True, db_index=True)
    location = models.CharField(max_length=300, blank=True)
    implementing_agency = models.CharField(max_length=200, blank=True)
    status = models.CharField(max_length=120, blank=True, db_index=True)

    start_date = models.DateField(null=True, blank=True)
    target_date = models.DateField(null=True, blank=True)

    target_area = models.FloatField(default=0, help_text="Hectares")
    trees_planted = models.PositiveIntegerField(default=0)
    tree_species = models.CharField(max_length=300, blank=True)
    budget = models.DecimalField(max_digits=16, decimal_places=2, default=0)

    initial_survival_rate = models.FloatField(default=0)
    initial_survival_date = models.DateField(null=True, blank=True)
    final_survival_rate = models.FloatField(default=0)
    final_survival_date = models.DateField(null=True, blank=True)

    description = models.TextField(blank=True)
    remarks = models.TextField(blank=True)

    kmz = models.FileField(upload_to=reforestation_kmz_upload_to, blank=True)
    kmz_name = models.CharField(max_length=255, blank=True)

    history = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["activity_name", "id"]
        verbose_name_plural = "reforestation activities"

    def __str__(self) -> str:
        return self.activity_name


class ReforestationPhoto(models.Model):
    activity = models.ForeignKey(ReforestationActivity, on_delete=models.CASCADE, related_name="photos")
    slot = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(3)],
    )
    image = models.ImageField(upload_to=reforestation_photo_upload_to)

    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["slot", "id"]
        constraints = [
            models.UniqueConstraint(fields=["activity", "slot"], name="uniq_reforestation_photo_slot"),
        ]

    def __str__(self) -> str:
        return f"{self.activity_id} photo {self.slot}"
