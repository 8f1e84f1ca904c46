"""Preparing a session's hours for publication."""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from volunteering.domain.durations import reconcile
from volunteering.domain.models import Signup
from volunteering.domain.value_objects import SignupId

ANONYMOUS_NAME = "No Name Volunteer"


@dataclass(frozen=True)
class HoursEntry:
    """One volunteer's validated hours, as sent to certificate issuance."""

    signup_id: SignupId
    user_id: UUID | None
    name: str
    email: str | None
    check_in: datetime
    check_out: datetime
    minutes: int


@dataclass(frozen=True)
class PublicationBatch:
    entries: tuple[HoursEntry, ...]
    excluded: int


@dataclass(frozen=True)
class PublicationResult:
    session_key: str
    created: int
    excluded: int
    already_published: bool = False


def build_batch(signups: Iterable[Signup]) -> PublicationBatch:
    """Keep signups with a valid duration, counting the ones left out."""
    entries = []
    excluded = 0
    for signup in signups:
        result = reconcile(signup.check_in_time, signup.check_out_time)
        if not result.is_valid:
            excluded += 1
            continue
        entries.append(
            HoursEntry(
                signup_id=signup.id,
                user_id=signup.user_id,
                name=signup.name or ANONYMOUS_NAME,
                email=signup.email,
                check_in=signup.check_in_time,
                check_out=signup.check_out_time,
                minutes=result.minutes,
            )
        )
    return PublicationBatch(entries=tuple(entries), excluded=excluded)
