"""Serializers for transforming domain models to API responses and parsing input."""

from rest_framework import serializers

from volunteering.domain.durations import format_duration
from volunteering.domain.value_objects import PublicationTrigger


class WindowsSerializer(serializers.Serializer):
    signup_cutoff = serializers.DateTimeField()
    attendance_signup_cutoff = serializers.DateTimeField()
    check_in_open = serializers.DateTimeField()
    attendance_check_in_open = serializers.DateTimeField()
    active_start = serializers.DateTimeField()
    active_end = serializers.DateTimeField()
    editing_deadline = serializers.DateTimeField()
    addressable_until = serializers.DateTimeField()


class SessionSerializer(serializers.Serializer):
    """Serializer for SessionView."""

    id = serializers.CharField(source="session.session_id")
    label = serializers.CharField(source="session.label")
    starts_at = serializers.DateTimeField(source="session.starts_at")
    ends_at = serializers.DateTimeField(source="session.ends_at")
    capacity = serializers.IntegerField(source="session.capacity.value")
    remaining_capacity = serializers.IntegerField()
    phase = serializers.CharField(source="phase.value")
    published = serializers.BooleanField()
    addressable = serializers.BooleanField()
    signup_open = serializers.BooleanField()
    windows = WindowsSerializer()


class ProjectOverviewSerializer(serializers.Serializer):
    """Serializer for ProjectOverview."""

    id = serializers.CharField(source="project.id")
    title = serializers.CharField(source="project.title")
    event_type = serializers.CharField(source="project.event_type.value")
    phase = serializers.SerializerMethodField()
    status = serializers.CharField(source="status.value")
    can_cancel = serializers.BooleanField()
    can_delete = serializers.BooleanField()
    session_count = serializers.SerializerMethodField()

    def get_phase(self, overview) -> str | None:
        return overview.phase.value if overview.phase is not None else None

    def get_session_count(self, overview) -> int:
        return len(overview.sessions)


class DurationSerializer(serializers.Serializer):
    minutes = serializers.IntegerField()
    is_valid = serializers.BooleanField()
    reason = serializers.CharField(allow_null=True)
    display = serializers.SerializerMethodField()

    def get_display(self, result) -> str:
        return format_duration(result)


class SignupHoursSerializer(serializers.Serializer):
    """Serializer for SignupHours."""

    signup_id = serializers.CharField(source="signup.id")
    name = serializers.CharField(source="signup.name", allow_null=True)
    email = serializers.CharField(source="signup.email", allow_null=True)
    status = serializers.CharField(source="signup.status.value")
    check_in_time = serializers.DateTimeField(source="signup.check_in_time")
    check_out_time = serializers.DateTimeField(source="signup.check_out_time")
    duration = DurationSerializer()


class SignupSerializer(serializers.Serializer):
    """Serializer for Signup domain model."""

    id = serializers.CharField()
    schedule_id = serializers.CharField()
    status = serializers.CharField(source="status.value")
    check_in_time = serializers.DateTimeField()
    check_out_time = serializers.DateTimeField()


class AdjustmentSerializer(serializers.Serializer):
    signup_id = serializers.CharField()
    applied = serializers.BooleanField()
    check_out_time = serializers.DateTimeField()
    duration = DurationSerializer(source="result")
    stored = serializers.BooleanField()
    error = serializers.CharField(allow_null=True)


class PublicationResultSerializer(serializers.Serializer):
    session_key = serializers.CharField()
    created = serializers.IntegerField()
    excluded = serializers.IntegerField()
    already_published = serializers.BooleanField()


# Input


class SignupRequestSerializer(serializers.Serializer):
    signup_id = serializers.UUIDField(format="hex_verbose")


class UpdateTimesRequestSerializer(serializers.Serializer):
    check_in_time = serializers.DateTimeField(allow_null=True)
    check_out_time = serializers.DateTimeField(allow_null=True)


class AdjustRequestSerializer(serializers.Serializer):
    offset_minutes = serializers.IntegerField(min_value=-1440, max_value=1440)
    signup_ids = serializers.ListField(
        child=serializers.UUIDField(format="hex_verbose"),
        required=False,
        allow_empty=False,
    )


class PublishRequestSerializer(serializers.Serializer):
    trigger = serializers.ChoiceField(
        choices=[trigger.value for trigger in PublicationTrigger],
        default=PublicationTrigger.MANUAL.value,
    )


class SignupCreateRequestSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(format="hex_verbose", required=False, allow_null=True)
    name = serializers.CharField(max_length=255, required=False, allow_null=True)
    email = serializers.EmailField(required=False, allow_null=True)

    def validate(self, attrs):
        if attrs.get("user_id") is None and not (attrs.get("name") and attrs.get("email")):
            raise serializers.ValidationError(
                "Anonymous signups need a name and an email."
            )
        return attrs
