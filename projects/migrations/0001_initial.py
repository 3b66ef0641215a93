import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import uploads.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("legacy_id", models.CharField(blank=True, max_length=120, null=True, unique=True)),
                ("name", models.CharField(max_length=300)),
                ("implementing_agency", models.CharField(blank=True, db_index=True, max_length=200)),
                ("location", models.CharField(blank=True, max_length=300)),
                ("contractor", models.CharField(max_length=300)),
                ("contract_amount", models.DecimalField(decimal_places=2, default=0, max_digits=16)),
                ("revised_contract_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=16, null=True)),
                ("contract_docs_link", models.URLField(blank=True, max_length=1000)),
                ("ntp_date", models.DateField(blank=True, null=True)),
                ("original_duration", models.PositiveIntegerField(default=0, help_text="Days")),
                ("time_extension", models.PositiveIntegerField(default=0, help_text="Days")),
                ("original_completion", models.DateField(blank=True, null=True)),
                ("revised_completion", models.DateField(blank=True, null=True)),
                ("activities", models.TextField(blank=True)),
                ("issues", models.TextField(blank=True)),
                ("remarks", models.TextField(blank=True)),
                ("other_details", models.TextField(blank=True)),
                ("history", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["name", "id"]},
        ),
        migrations.CreateModel(
            name="Accomplishment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("percent", models.FloatField(default=0)),
                ("prev_percent", models.FloatField(default=0)),
                ("planned_percent", models.FloatField(default=0)),
                ("variance", models.FloatField(default=0)),
                ("activities", models.TextField(blank=True)),
                ("issue", models.TextField(blank=True)),
                ("action", models.TextField(blank=True)),
                ("remarks", models.TextField(blank=True)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="accomplishments",
                        to="projects.project",
                    ),
                ),
            ],
            options={"ordering": ["id"]},
        ),
        migrations.CreateModel(
            name="BillingEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("date", models.DateField()),
                ("amount", models.DecimalField(decimal_places=2, max_digits=16)),
                ("description", models.CharField(blank=True, max_length=300)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="billing_entries",
                        to="projects.project",
                    ),
                ),
            ],
            options={"ordering": ["date", "id"]},
        ),
        migrations.CreateModel(
            name="ProjectPhoto",
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
                ("image", models.ImageField(upload_to=uploads.models.project_photo_upload_to)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="photos",
                        to="projects.project",
                    ),
                ),
            ],
            options={"ordering": ["slot", "id"]},
        ),
        migrations.AddConstraint(
            model_name="projectphoto",
            constraint=models.UniqueConstraint(fields=("project", "slot"), name="uniq_project_photo_slot"),
        ),
    ]
