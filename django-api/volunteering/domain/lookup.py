"""Resolving session ids against a project's current schedule.

Besides canonical ids, older records address sessions with identifiers built
from positions rather than dates or names:

- one-time: ``"0"``, ``"default"``
- multi-day: ``"day-{dayIndex}-slot-{slotIndex}"``, ``"{dayIndex}-{slotIndex}"``
- multi-area: ``"role-{roleIndex}"``, ``"role{roleIndex}"``, ``"{roleIndex}"``

Those aliases keep persisted signups, printed QR codes and publication keys
addressable. A canonical match always takes precedence over an alias.
"""

import re
from collections import Counter, defaultdict
from collections.abc import Iterable

from volunteering.domain.models import Project, Signup
from volunteering.domain.schedule import Session, enumerate_sessions
from volunteering.domain.session_ids import decode
from volunteering.domain.value_objects import EventType, SignupStatus

ONE_TIME_ALIASES = frozenset({"0", "default"})
_DAY_SLOT_ALIASES = (
    re.compile(r"^day-(\d+)-slot-(\d+)$", re.ASCII),
    re.compile(r"^(\d+)-(\d+)$", re.ASCII),
)
_ROLE_ALIAS = re.compile(r"^(?:role-?)?(\d+)$", re.ASCII)

# Signups holding a seat in a session.
SEATED_STATUSES = frozenset({SignupStatus.APPROVED, SignupStatus.ATTENDED})


def find_session(project: Project, session_id: str | None) -> Session | None:
    """Return the session addressed by ``session_id``, or None.

    None means the session is unavailable, typically because the schedule
    was edited after the id was issued.
    """
    if not session_id:
        return None
    sessions = enumerate_sessions(project)
    ref = decode(project.event_type, session_id)
    if ref is not None:
        for session in sessions:
            if session.ref == ref:
                return session
    return _resolve_alias(project.event_type, sessions, session_id)


def resolve_session_id(project: Project, session_id: str | None) -> str | None:
    """Map any known form of a session id to its canonical id."""
    session = find_session(project, session_id)
    return session.session_id if session is not None else None


def _resolve_alias(
    event_type: EventType, sessions: tuple[Session, ...], alias: str
) -> Session | None:
    match event_type:
        case EventType.ONE_TIME:
            if alias in ONE_TIME_ALIASES and sessions:
                return sessions[0]
        case EventType.MULTI_DAY:
            found = next(
                (m for m in (p.match(alias) for p in _DAY_SLOT_ALIASES) if m), None
            )
            if found is None:
                return None
            day_index, slot_index = int(found.group(1)), int(found.group(2))
            for session in sessions:
                if (
                    session.day_index == day_index
                    and session.ref.slot_index == slot_index
                ):
                    return session
        case EventType.SAME_DAY_MULTI_AREA:
            found = _ROLE_ALIAS.match(alias)
            if found is None:
                return None
            role_index = int(found.group(1))
            for session in sessions:
                if session.role_index == role_index:
                    return session
    return None


def signups_for_session(
    project: Project, session: Session, signups: Iterable[Signup]
) -> list[Signup]:
    """Signups of ``session``, whichever id form they were stored under."""
    return [
        signup
        for signup in signups
        if resolve_session_id(project, signup.schedule_id) == session.session_id
    ]


def group_signups_by_session(
    project: Project, signups: Iterable[Signup]
) -> dict[str, list[Signup]]:
    """Group signups by canonical session id, dropping unresolvable ones."""
    grouped: dict[str, list[Signup]] = defaultdict(list)
    for signup in signups:
        session_id = resolve_session_id(project, signup.schedule_id)
        if session_id is not None:
            grouped[session_id].append(signup)
    return dict(grouped)


def remaining_capacity(project: Project, signups: Iterable[Signup]) -> dict[str, int]:
    """Open seats per canonical session id, never below zero."""
    taken = Counter(
        resolve_session_id(project, signup.schedule_id)
        for signup in signups
        if signup.status in SEATED_STATUSES
    )
    return {
        session.session_id: max(0, session.capacity.value - taken[session.session_id])
        for session in enumerate_sessions(project)
    }
