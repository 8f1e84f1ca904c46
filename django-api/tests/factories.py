"""Builders for domain objects and stored schedule documents."""

import uuid
from datetime import datetime

from volunteering.domain import Project, ProjectId, PublicationState, Signup, SignupId
from volunteering.domain.schedule import parse_schedule
from volunteering.domain.value_objects import (
    EventType,
    ProjectStatus,
    SignupStatus,
    VerificationMethod,
)


def slot_doc(start: str, end: str, volunteers: int = 5) -> dict:
    return {"startTime": start, "endTime": end, "volunteers": volunteers}


def one_time_doc(
    date: str = "2025-06-01", start: str = "09:00", end: str = "12:00", volunteers: int = 10
) -> dict:
    return {"oneTime": {"date": date, **slot_doc(start, end, volunteers)}}


def multi_day_doc(*days: tuple[str, list[tuple[str, str]]]) -> dict:
    return {
        "multiDay": [
            {"date": date, "slots": [slot_doc(start, end) for start, end in slots]}
            for date, slots in days
        ]
    }


def multi_area_doc(date: str, *roles: tuple[str, str, str]) -> dict:
    return {
        "sameDayMultiArea": {
            "date": date,
            "overallStart": min(start for _, start, _ in roles),
            "overallEnd": max(end for _, _, end in roles),
            "roles": [
                {"name": name, **slot_doc(start, end)} for name, start, end in roles
            ],
        }
    }


SCENARIO_B_DOC = multi_day_doc(("2025-07-10", [("09:00", "11:00"), ("13:00", "15:00")]))


def make_project(
    event_type: EventType = EventType.ONE_TIME,
    schedule: dict | None = None,
    published: dict | None = None,
    status: ProjectStatus = ProjectStatus.UPCOMING,
) -> Project:
    document = schedule if schedule is not None else one_time_doc()
    return Project(
        id=ProjectId(uuid.uuid4()),
        title="Beach Cleanup",
        location="Ocean Beach",
        event_type=event_type,
        schedule=parse_schedule(event_type, document),
        status=status,
        verification_method=VerificationMethod.QR_CODE,
        created_at=datetime(2025, 5, 1, 10, 0),
        published=PublicationState.from_mapping(published),
        creator_name="Dana Organizer",
        organization_name="Shoreline Friends",
        organization_verified=True,
    )


def make_signup(
    project: Project,
    schedule_id: str = "oneTime",
    check_in: datetime | None = None,
    check_out: datetime | None = None,
    status: SignupStatus = SignupStatus.APPROVED,
    name: str | None = "Alex Volunteer",
    anonymous: bool = False,
) -> Signup:
    return Signup(
        id=SignupId(uuid.uuid4()),
        project_id=project.id,
        schedule_id=schedule_id,
        status=status,
        user_id=None if anonymous else uuid.uuid4(),
        anonymous_signup_id=uuid.uuid4() if anonymous else None,
        name=name,
        email="alex@example.org",
        check_in_time=check_in,
        check_out_time=check_out,
    )
