"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models
from django.db.models import Q


class Project(models.Model):
    """Persistence model for volunteering projects."""

    class EventType(models.TextChoices):
        ONE_TIME = "oneTime", "One time"
        MULTI_DAY = "multiDay", "Multi day"
        SAME_DAY_MULTI_AREA = "sameDayMultiArea", "Same day, multiple areas"

    class Status(models.TextChoices):
        UPCOMING = "upcoming"
        IN_PROGRESS = "in-progress"
        COMPLETED = "completed"
        CANCELLED = "cancelled"

    class VerificationMethod(models.TextChoices):
        QR_CODE = "qr-code"
        MANUAL = "manual"
        AUTO = "auto"
        SIGNUP_ONLY = "signup-only"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    location = models.CharField(max_length=255)
    event_type = models.CharField(max_length=32, choices=EventType.choices)
    schedule = models.JSONField(default=dict)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.UPCOMING
    )
    verification_method = models.CharField(
        max_length=16,
        choices=VerificationMethod.choices,
        default=VerificationMethod.QR_CODE,
    )
    # Session id -> True once hours are published. Keys are never removed.
    published = models.JSONField(default=dict, blank=True)
    creator_name = models.CharField(max_length=255, blank=True, null=True)
    organization_name = models.CharField(max_length=255, blank=True, null=True)
    organization_verified = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["-created_at"], name="project_created_idx"),
        ]

    def __str__(self) -> str:
        return self.title


class Signup(models.Model):
    """Persistence model for project signups."""

    class Status(models.TextChoices):
        PENDING = "pending"
        APPROVED = "approved"
        REJECTED = "rejected"
        ATTENDED = "attended"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        Project, on_delete=models.CASCADE, related_name="signups"
    )
    schedule_id = models.CharField(max_length=255)
    user_id = models.UUIDField(blank=True, null=True)
    anonymous_signup_id = models.UUIDField(blank=True, null=True)
    volunteer_name = models.CharField(max_length=255, blank=True, null=True)
    volunteer_email = models.EmailField(blank=True, null=True)
    status = models.CharField(
        max_length=16, choices=Status.choices, default=Status.PENDING
    )
    check_in_time = models.DateTimeField(blank=True, null=True)
    check_out_time = models.DateTimeField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["volunteer_name", "created_at"]
        indexes = [
            models.Index(fields=["project", "schedule_id"], name="signup_project_schedule_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(user_id__isnull=False, anonymous_signup_id__isnull=True)
                    | Q(user_id__isnull=True, anonymous_signup_id__isnull=False)
                ),
                name="signup_single_identity",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.volunteer_name or self.id} - {self.schedule_id}"


class Certificate(models.Model):
    """Persistence model for issued certificates. Rows are never updated."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        Project, on_delete=models.PROTECT, related_name="certificates"
    )
    signup = models.ForeignKey(
        Signup, on_delete=models.PROTECT, related_name="certificates"
    )
    session_key = models.CharField(max_length=255)
    user_id = models.UUIDField(blank=True, null=True)
    volunteer_name = models.CharField(max_length=255)
    volunteer_email = models.EmailField(blank=True, null=True)
    project_title = models.CharField(max_length=255)
    project_location = models.CharField(max_length=255)
    event_start = models.DateTimeField()
    event_end = models.DateTimeField()
    organization_name = models.CharField(max_length=255, blank=True, null=True)
    creator_name = models.CharField(max_length=255)
    is_certified = models.BooleanField(default=False)
    check_in_method = models.CharField(max_length=16)
    issued_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["signup", "session_key"],
                name="certificate_once_per_signup_session",
            ),
        ]
        indexes = [
            models.Index(fields=["project", "session_key"], name="cert_project_session_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.volunteer_name} - {self.project_title}"
