import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Facility",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "facility_type",
                    models.CharField(
                        choices=[
                            ("coworking-spaces", "Coworking Spaces"),
                            ("bio-allied-labs", "Bio Allied Labs"),
                            ("raw-space-lab", "Raw Space Lab"),
                        ],
                        max_length=30,
                    ),
                ),
                ("name", models.CharField(max_length=200)),
                ("description", models.TextField()),
                ("images", models.JSONField(blank=True, default=list)),
                ("video_link", models.CharField(blank=True, default="", max_length=500)),
                ("rental_plans", models.JSONField(blank=True, default=list)),
                ("details", models.JSONField(blank=True, default=dict)),
                (
                    "starting_price",
                    models.DecimalField(blank=True, db_index=True, decimal_places=2, max_digits=12, null=True),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("deactivated", "Deactivated")],
                        default="active",
                        max_length=20,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="facilities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "facilities",
                "ordering": ["-created_at"],
            },
        ),
    ]
