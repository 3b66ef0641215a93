# -*- coding: utf-8 -*-
# deepwells/models.py

from __future__ import annotations

from django.core.validators import RegexValidator
from django.db import models

month_validator = RegexValidator(r"^\d{4}-(0[1-9]|1[0-2])$", "Use YYYY-MM.")


class Deepwell(models.Model):
    """
    Water-source well. average/total production are derived from the
    monthly rows and refreshed on every save through the dashboard.
    """

    class Provider(models.TextChoices):
        MWCI = "MWCI", "MWCI"
        MWSI = "MWSI", "MWSI"

    legacy_id = models.CharField(max_length=120, unique=True, null=True, blank=True)

    name = models.CharField(max_length=200)
    provider = models.CharField(max_length=20, choices=Provider.choices, db_index=True)
    permit = models.CharField(max_length=200, blank=True)
    status = models.CharField(max_length=100, blank=True, db_index=True)
    rated_yield = models.FloatField(default=0)
    location = models.CharField(max_length=300, blank=True)
    municipality = models.CharField(max_length=200, blank=True)

    average_production = models.FloatField(default=0)
    total_production = models.FloatField(default=0)

    history = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]

    def __str__(self) -> str:
        return f"{self.name} ({self.provider})"


class MonthlyProduction(models.Model):
    deepwell = models.ForeignKey(Deepwell, on_delete=models.CASCADE, related_name="months")
    month = models.CharField(max_length=7, validators=[month_validator])
    production = models.FloatField()

    class Meta:
        ordering = ["month", "id"]

    def __str__(self) -> str:
        return f"{self.deepwell_id} {self.month}: {self.production}"
