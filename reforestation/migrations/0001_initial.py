import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import uploads.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ReforestationActivity",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("legacy_id", models.CharField(blank=True, max_length=120, null=True, unique=True)),
                ("activity_name", models.CharField(max_length=300)),
                ("activity_type", models.CharField(blank=True, db_index=True, max_length=120)),
                ("location", models.CharField(blank=True, max_length=300)),
                ("implementing_agency", models.CharField(blank=True, max_length=200)),
                ("status", models.CharField(blank=True, db_index=True, max_length=120)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("target_date", models.DateField(blank=True, null=True)),
                ("target_area", models.FloatField(default=0, help_text="Hectares")),
                ("trees_planted", models.PositiveIntegerField(default=0)),
                ("tree_species", models.CharField(blank=True, max_length=300)),
                ("budget", models.DecimalField(decimal_places=2, default=0, max_digits=16)),
                ("initial_survival_rate", models.FloatField(default=0)),
                ("initial_survival_date", models.DateField(blank=True, null=True)),
                ("final_survival_rate", models.FloatField(default=0)),
                ("final_survival_date", models.DateField(blank=True, null=True)),
                ("description", models.TextField(blank=True)),
                ("remarks", models.TextField(blank=True)),
                ("kmz", models.FileField(blank=True, upload_to=uploads.models.reforestation_kmz_upload_to)),
                ("kmz_name", models.CharField(blank=True, max_length=255)),
                ("history", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["activity_name", "id"],
                "verbose_name_plural": "reforestation activities",
            },
        ),
        migrations.CreateModel(
            name="ReforestationPhoto",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "slot",
                    models.PositiveSmallIntegerField(
                        default=1,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(3),
                        ],
                    ),
                ),
                ("image", models.ImageField(upload_to=uploads.models.reforestation_photo_upload_to)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
                (
                    "activity",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="photos",
                        to="reforestation.reforestationactivity",
                    ),
                ),
            ],
            options={"ordering": ["slot", "id"]},
        ),
        migrations.AddConstraint(
            model_name="reforestationphoto",
            constraint=models.UniqueConstraint(fields=("activity", "slot"), name="uniq_reforestation_photo_slot"),
        ),
    ]
