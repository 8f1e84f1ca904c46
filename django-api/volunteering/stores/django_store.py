"""Django ORM implementations of the stores."""

from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import datetime

from django.db import transaction

from volunteering import models as orm
from volunteering.domain import Project, ProjectId, PublicationState, Signup, SignupId
from volunteering.domain.publication import HoursEntry
from volunteering.domain.schedule import parse_schedule
from volunteering.domain.value_objects import (
    EventType,
    ProjectStatus,
    SignupStatus,
    VerificationMethod,
)
from volunteering.stores.interfaces import CertificateIssuer, ProjectStore, SignupStore

DEFAULT_CREATOR_NAME = "Project Organizer"


def to_domain_project(row: orm.Project) -> Project:
    event_type = EventType(row.event_type)
    return Project(
        id=ProjectId(row.id),
        title=row.title,
        location=row.location,
        event_type=event_type,
        schedule=parse_schedule(event_type, row.schedule),
        status=ProjectStatus(row.status),
        verification_method=VerificationMethod(row.verification_method),
        created_at=row.created_at,
        published=PublicationState.from_mapping(row.published),
        description=row.description,
        creator_name=row.creator_name,
        organization_name=row.organization_name,
        organization_verified=row.organization_verified,
    )


def to_domain_signup(row: orm.Signup) -> Signup:
    return Signup(
        id=SignupId(row.id),
        project_id=ProjectId(row.project_id),
        schedule_id=row.schedule_id,
        status=SignupStatus(row.status),
        user_id=row.user_id,
        anonymous_signup_id=row.anonymous_signup_id,
        name=row.volunteer_name,
        email=row.volunteer_email,
        check_in_time=row.check_in_time,
        check_out_time=row.check_out_time,
    )


class DjangoProjectStore(ProjectStore):
    """PostgreSQL-backed project store using Django ORM."""

    def get_project(self, project_id: ProjectId) -> Project | None:
        row = orm.Project.objects.filter(id=project_id.value).first()
        return to_domain_project(row) if row is not None else None

    def atomic(self) -> AbstractContextManager[None]:
        return transaction.atomic()

    def lock_project(self, project_id: ProjectId) -> None:
        list(
            orm.Project.objects.select_for_update()
            .filter(id=project_id.value)
            .values_list("id", flat=True)
        )

    def is_published(self, project_id: ProjectId, session_key: str) -> bool:
        published = (
            orm.Project.objects.select_for_update()
            .filter(id=project_id.value)
            .values_list("published", flat=True)
            .first()
        )
        return PublicationState.from_mapping(published).is_published(session_key)

    def mark_published(self, project_id: ProjectId, session_key: str) -> None:
        row = orm.Project.objects.select_for_update().get(id=project_id.value)
        state = PublicationState.from_mapping(row.published).mark(session_key)
        # Unknown keys written by older clients are kept as they are.
        row.published = {**(row.published or {}), **state.to_dict()}
        row.save(update_fields=["published", "updated_at"])


class DjangoSignupStore(SignupStore):
    """PostgreSQL-backed signup store using Django ORM."""

    def list_signups(self, project_id: ProjectId) -> list[Signup]:
        rows = orm.Signup.objects.filter(project_id=project_id.value)
        return [to_domain_signup(row) for row in rows]

    def get_signup(self, signup_id: SignupId) -> Signup | None:
        row = orm.Signup.objects.filter(id=signup_id.value).first()
        return to_domain_signup(row) if row is not None else None

    def save_times(
        self,
        signup_id: SignupId,
        check_in_time: datetime | None,
        check_out_time: datetime | None,
    ) -> Signup:
        row = orm.Signup.objects.get(id=signup_id.value)
        row.check_in_time = check_in_time
        row.check_out_time = check_out_time
        row.save(update_fields=["check_in_time", "check_out_time"])
        return to_domain_signup(row)

    def record_check_in(self, signup_id: SignupId, check_in_time: datetime) -> Signup:
        row = orm.Signup.objects.get(id=signup_id.value)
        row.check_in_time = check_in_time
        row.status = orm.Signup.Status.ATTENDED
        row.save(update_fields=["check_in_time", "status"])
        return to_domain_signup(row)

    def create_signup(self, signup: Signup) -> Signup:
        row = orm.Signup.objects.create(
            id=signup.id.value,
            project_id=signup.project_id.value,
            schedule_id=signup.schedule_id,
            user_id=signup.user_id,
            anonymous_signup_id=signup.anonymous_signup_id,
            volunteer_name=signup.name,
            volunteer_email=signup.email,
            status=signup.status.value,
        )
        return to_domain_signup(row)

    def delete_signup(self, signup_id: SignupId) -> None:
        orm.Signup.objects.filter(id=signup_id.value).delete()


class DjangoCertificateIssuer(CertificateIssuer):
    """Writes certificate rows, relying on the (signup, session_key) constraint."""

    def issue(
        self, project: Project, session_key: str, entries: Sequence[HoursEntry]
    ) -> int:
        existing = set(
            orm.Certificate.objects.filter(
                project_id=project.id.value,
                session_key=session_key,
                signup_id__in=[entry.signup_id.value for entry in entries],
            ).values_list("signup_id", flat=True)
        )
        rows = [
            orm.Certificate(
                project_id=project.id.value,
                signup_id=entry.signup_id.value,
                session_key=session_key,
                user_id=entry.user_id,
                volunteer_name=entry.name,
                volunteer_email=entry.email,
                project_title=project.title,
                project_location=project.location,
                event_start=entry.check_in,
                event_end=entry.check_out,
                organization_name=project.organization_name,
                creator_name=project.creator_name or DEFAULT_CREATOR_NAME,
                is_certified=project.organization_verified,
                check_in_method=project.verification_method.value,
            )
            for entry in entries
            if entry.signup_id.value not in existing
        ]
        if rows:
            orm.Certificate.objects.bulk_create(rows)
        return len(rows)
