import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Deepwell",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("legacy_id", models.CharField(blank=True, max_length=120, null=True, unique=True)),
                ("name", models.CharField(max_length=200)),
                (
                    "provider",
                    models.CharField(choices=[("MWCI", "MWCI"), ("MWSI", "MWSI")], db_index=True, max_length=20),
                ),
                ("permit", models.CharField(blank=True, max_length=200)),
                ("status", models.CharField(blank=True, db_index=True, max_length=100)),
                ("rated_yield", models.FloatField(default=0)),
                ("location", models.CharField(blank=True, max_length=300)),
                ("municipality", models.CharField(blank=True, max_length=200)),
                ("average_production", models.FloatField(default=0)),
                ("total_production", models.FloatField(default=0)),
                ("history", models.JSONField(blank=True, default=list)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["name", "id"]},
        ),
        migrations.CreateModel(
            name="MonthlyProduction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "month",
                    models.CharField(
                        max_length=7,
                        validators=[
                            django.core.validators.RegexValidator("^\\d{4}-(0[1-9]|1[0-2])$", "Use YYYY-MM.")
                        ],
                    ),
                ),
                ("production", models.FloatField()),
                (
                    "deepwell",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="months",
                        to="deepwells.deepwell",
                    ),
                ),
            ],
            options={"ordering": ["month", "id"]},
        ),
    ]
