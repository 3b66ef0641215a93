from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ChangeNotification",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "collection",
                    models.CharField(
                        choices=[
                            ("projects", "Projects"),
                            ("deepwells", "Deepwells"),
                            ("reforestations", "Reforestation activities"),
                            ("messages", "Messages"),
                        ],
                        max_length=30,
                    ),
                ),
                ("object_id", models.PositiveBigIntegerField()),
                (
                    "change_type",
                    models.CharField(
                        choices=[("added", "Added"), ("modified", "Modified"), ("removed", "Removed")],
                        max_length=10,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["id"],
                "indexes": [models.Index(fields=["collection", "id"], name="changenotif_coll_id_idx")],
            },
        ),
    ]
