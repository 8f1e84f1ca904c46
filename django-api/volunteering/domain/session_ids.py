"""Canonical session identifiers.

Every session of a project is addressed by one string, used as storage key,
URL parameter, QR payload and key of the project's ``published`` map:

- one-time events: the literal ``"oneTime"``
- multi-day events: ``"{YYYY-MM-DD}-{slotIndex}"``
- same-day multi-area events: the role name
"""

from dataclasses import dataclass
from datetime import date

from volunteering.domain.value_objects import EventType

ONE_TIME_ID = "oneTime"


@dataclass(frozen=True)
class OneTimeRef:
    """The single session of a one-time event."""


@dataclass(frozen=True)
class SlotRef:
    """One slot of one day of a multi-day event."""

    date: date
    slot_index: int


@dataclass(frozen=True)
class RoleRef:
    """One role of a same-day multi-area event."""

    name: str


SessionRef = OneTimeRef | SlotRef | RoleRef


def encode(ref: SessionRef) -> str:
    """Return the canonical id of a session reference."""
    match ref:
        case OneTimeRef():
            return ONE_TIME_ID
        case SlotRef(date=day, slot_index=index):
            return f"{day.isoformat()}-{index}"
        case RoleRef(name=name):
            return name
    raise TypeError(f"Unknown session reference: {ref!r}")


def decode(event_type: EventType, session_id: str) -> SessionRef | None:
    """Parse a canonical id for the given event type.

    Only the syntax is checked; whether the session exists is decided by
    ``find_session``. Returns None when the id cannot be parsed.
    """
    if not session_id:
        return None
    match event_type:
        case EventType.ONE_TIME:
            return OneTimeRef() if session_id == ONE_TIME_ID else None
        case EventType.MULTI_DAY:
            return _decode_slot(session_id)
        case EventType.SAME_DAY_MULTI_AREA:
            return RoleRef(name=session_id)
    return None


def _decode_slot(session_id: str) -> SlotRef | None:
    # Dates contain hyphens, the slot index never does.
    day_part, sep, index_part = session_id.rpartition("-")
    if not sep or not (index_part.isascii() and index_part.isdigit()):
        return None
    if str(int(index_part)) != index_part:
        return None
    try:
        day = date.fromisoformat(day_part)
    except ValueError:
        return None
    if day.isoformat() != day_part:
        return None
    return SlotRef(date=day, slot_index=int(index_part))
