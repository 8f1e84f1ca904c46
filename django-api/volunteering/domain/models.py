"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in volunteering/models.py (persistence layer).
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Self
from uuid import UUID

from volunteering.domain.schedule import Schedule
from volunteering.domain.value_objects import (
    EventType,
    ProjectId,
    ProjectStatus,
    SignupId,
    SignupStatus,
    VerificationMethod,
)


@dataclass(frozen=True)
class PublicationState(Mapping[str, bool]):
    """Sessions whose hours have been published, keyed by session id.

    A one-way latch: ``mark`` returns a new state with the key set and there
    is no way to unset it.
    """

    _published: frozenset[str] = frozenset()

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object] | None) -> Self:
        if not raw:
            return cls()
        return cls(frozenset(key for key, value in raw.items() if value is True))

    def is_published(self, session_key: str) -> bool:
        return session_key in self._published

    def mark(self, session_key: str) -> Self:
        return type(self)(self._published | {session_key})

    def to_dict(self) -> dict[str, bool]:
        return {key: True for key in sorted(self._published)}

    def __getitem__(self, key: str) -> bool:
        if key not in self._published:
            raise KeyError(key)
        return True

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._published))

    def __len__(self) -> int:
        return len(self._published)


@dataclass(frozen=True)
class Project:
    """Domain representation of a volunteering Project.

    ``schedule`` is None when the stored document could not be parsed; such
    a project simply has no sessions.
    """

    id: ProjectId
    title: str
    location: str
    event_type: EventType
    schedule: Schedule | None
    status: ProjectStatus
    verification_method: VerificationMethod
    created_at: datetime
    published: PublicationState = field(default_factory=PublicationState)
    description: str = ""
    creator_name: str | None = None
    organization_name: str | None = None
    organization_verified: bool = False


@dataclass(frozen=True)
class Signup:
    """Domain representation of a volunteer's signup for one session.

    Exactly one of ``user_id`` and ``anonymous_signup_id`` is set.
    ``schedule_id`` is stored as written, which may be an older alias of the
    canonical session id.
    """

    id: SignupId
    project_id: ProjectId
    schedule_id: str
    status: SignupStatus
    user_id: UUID | None = None
    anonymous_signup_id: UUID | None = None
    name: str | None = None
    email: str | None = None
    check_in_time: datetime | None = None
    check_out_time: datetime | None = None

    def __post_init__(self) -> None:
        if (self.user_id is None) == (self.anonymous_signup_id is None):
            raise ValueError(
                "Signup needs exactly one of user_id and anonymous_signup_id"
            )


@dataclass(frozen=True)
class Certificate:
    """Immutable record of published volunteer hours."""

    id: UUID
    signup_id: SignupId
    project_id: ProjectId
    session_key: str
    user_id: UUID | None
    volunteer_name: str
    volunteer_email: str | None
    project_title: str
    project_location: str
    event_start: datetime
    event_end: datetime
    organization_name: str | None
    creator_name: str
    is_certified: bool
    check_in_method: VerificationMethod
    issued_at: datetime
