import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Project",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("location", models.CharField(max_length=255)),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("oneTime", "One time"),
                            ("multiDay", "Multi day"),
                            ("sameDayMultiArea", "Same day, multiple areas"),
                        ],
                        max_length=32,
                    ),
                ),
                ("schedule", models.JSONField(default=dict)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("upcoming", "Upcoming"),
                            ("in-progress", "In Progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="upcoming",
                        max_length=16,
                    ),
                ),
                (
                    "verification_method",
                    models.CharField(
                        choices=[
                            ("qr-code", "Qr Code"),
                            ("manual", "Manual"),
                            ("auto", "Auto"),
                            ("signup-only", "Signup Only"),
                        ],
                        default="qr-code",
                        max_length=16,
                    ),
                ),
                ("published", models.JSONField(blank=True, default=dict)),
                ("creator_name", models.CharField(blank=True, max_length=255, null=True)),
                ("organization_name", models.CharField(blank=True, max_length=255, null=True)),
                ("organization_verified", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["-created_at"], name="project_created_idx")],
            },
        ),
        migrations.CreateModel(
            name="Signup",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("schedule_id", models.CharField(max_length=255)),
                ("user_id", models.UUIDField(blank=True, null=True)),
                ("anonymous_signup_id", models.UUIDField(blank=True, null=True)),
                ("volunteer_name", models.CharField(blank=True, max_length=255, null=True)),
                ("volunteer_email", models.EmailField(blank=True, max_length=254, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                            ("attended", "Attended"),
                        ],
                        default="pending",
                        max_length=16,
                    ),
                ),
                ("check_in_time", models.DateTimeField(blank=True, null=True)),
                ("check_out_time", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="signups",
                        to="volunteering.project",
                    ),
                ),
            ],
            options={
                "ordering": ["volunteer_name", "created_at"],
                "indexes": [models.Index(fields=["project", "schedule_id"], name="signup_project_schedule_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("anonymous_signup_id__isnull", True), ("user_id__isnull", False)),
                            models.Q(("anonymous_signup_id__isnull", False), ("user_id__isnull", True)),
                            _connector="OR",
                        ),
                        name="signup_single_identity",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Certificate",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("session_key", models.CharField(max_length=255)),
                ("user_id", models.UUIDField(blank=True, null=True)),
                ("volunteer_name", models.CharField(max_length=255)),
                ("volunteer_email", models.EmailField(blank=True, max_length=254, null=True)),
                ("project_title", models.CharField(max_length=255)),
                ("project_location", models.CharField(max_length=255)),
                ("event_start", models.DateTimeField()),
                ("event_end", models.DateTimeField()),
                ("organization_name", models.CharField(blank=True, max_length=255, null=True)),
                ("creator_name", models.CharField(max_length=255)),
                ("is_certified", models.BooleanField(default=False)),
                ("check_in_method", models.CharField(max_length=16)),
                ("issued_at", models.DateTimeField(auto_now_add=True)),
                (
                    "project",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="certificates",
                        to="volunteering.project",
                    ),
                ),
                (
                    "signup",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="certificates",
                        to="volunteering.signup",
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["project", "session_key"], name="cert_project_session_idx")],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("signup", "session_key"),
                        name="certificate_once_per_signup_session",
                    )
                ],
            },
        ),
    ]
