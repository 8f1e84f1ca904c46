"""Schedule shapes and the sessions they contain.

A project's schedule is exactly one of three closed shapes. All shape
specific branching lives in this module: the rest of the code base works with
the flat ``Session`` sequence returned by ``enumerate_sessions``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import TYPE_CHECKING, Any

from volunteering.domain.session_ids import (
    OneTimeRef,
    RoleRef,
    SessionRef,
    SlotRef,
    encode,
)
from volunteering.domain.value_objects import Capacity, EventType

if TYPE_CHECKING:
    from volunteering.domain.models import Project

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeSlot:
    """A start/end clock time pair with its volunteer capacity."""

    start_time: time
    end_time: time
    capacity: Capacity


@dataclass(frozen=True)
class OneTimeSchedule:
    date: date
    slot: TimeSlot


@dataclass(frozen=True)
class ScheduleDay:
    date: date
    slots: tuple[TimeSlot, ...]


@dataclass(frozen=True)
class MultiDaySchedule:
    days: tuple[ScheduleDay, ...]


@dataclass(frozen=True)
class Role:
    name: str
    slot: TimeSlot


@dataclass(frozen=True)
class SameDayMultiAreaSchedule:
    date: date
    roles: tuple[Role, ...]
    overall_start: time | None = None
    overall_end: time | None = None


Schedule = OneTimeSchedule | MultiDaySchedule | SameDayMultiAreaSchedule

_SCHEDULE_KEYS = {
    EventType.ONE_TIME: "oneTime",
    EventType.MULTI_DAY: "multiDay",
    EventType.SAME_DAY_MULTI_AREA: "sameDayMultiArea",
}


@dataclass(frozen=True)
class Session:
    """One addressable unit of volunteering, derived from a schedule.

    ``day_index`` and ``role_index`` keep the declared position of the
    session, which older identifiers were built from.
    """

    ref: SessionRef
    starts_at: datetime
    ends_at: datetime
    capacity: Capacity
    label: str
    day_index: int | None = None
    role_index: int | None = None

    @property
    def session_id(self) -> str:
        return encode(self.ref)


def event_type_of(schedule: Schedule) -> EventType:
    match schedule:
        case OneTimeSchedule():
            return EventType.ONE_TIME
        case MultiDaySchedule():
            return EventType.MULTI_DAY
        case SameDayMultiAreaSchedule():
            return EventType.SAME_DAY_MULTI_AREA
    raise TypeError(f"Unknown schedule: {schedule!r}")


def enumerate_sessions(project: Project) -> tuple[Session, ...]:
    """Flatten the project's schedule into sessions, in schedule order.

    Days then slots for multi-day events, roles as declared for multi-area
    events. A missing or mismatched schedule yields no sessions.
    """
    schedule = project.schedule
    if schedule is None or event_type_of(schedule) is not project.event_type:
        return ()

    match schedule:
        case OneTimeSchedule(date=day, slot=slot):
            return (_session(OneTimeRef(), day, slot, _format_label(day, slot)),)
        case MultiDaySchedule(days=days):
            return tuple(
                _session(
                    SlotRef(date=schedule_day.date, slot_index=slot_index),
                    schedule_day.date,
                    slot,
                    _format_label(schedule_day.date, slot),
                    day_index=day_index,
                )
                for day_index, schedule_day in enumerate(days)
                for slot_index, slot in enumerate(schedule_day.slots)
            )
        case SameDayMultiAreaSchedule(date=day, roles=roles):
            return tuple(
                _session(
                    RoleRef(name=role.name),
                    day,
                    role.slot,
                    f"{_format_label(day, role.slot)} - {role.name}",
                    role_index=role_index,
                )
                for role_index, role in enumerate(roles)
            )
    return ()


def _session(
    ref: SessionRef,
    day: date,
    slot: TimeSlot,
    label: str,
    day_index: int | None = None,
    role_index: int | None = None,
) -> Session:
    starts_at = datetime.combine(day, slot.start_time)
    ends_at = datetime.combine(day, slot.end_time)
    if ends_at < starts_at:
        # Overnight shift.
        ends_at += timedelta(days=1)
    return Session(
        ref=ref,
        starts_at=starts_at,
        ends_at=ends_at,
        capacity=slot.capacity,
        label=label,
        day_index=day_index,
        role_index=role_index,
    )


def _format_label(day: date, slot: TimeSlot) -> str:
    return (
        f"{day:%B} {day.day}, {day.year} "
        f"({_format_clock(slot.start_time)} - {_format_clock(slot.end_time)})"
    )


def _format_clock(value: time) -> str:
    hour = value.hour % 12 or 12
    period = "AM" if value.hour < 12 else "PM"
    return f"{hour}:{value.minute:02d} {period}"


# Parsing of stored schedule documents


class _MalformedSchedule(ValueError):
    pass


def parse_schedule(event_type: EventType, raw: Any) -> Schedule | None:
    """Build a schedule from its stored JSON document.

    The document keeps one sub-document per shape (``oneTime``,
    ``multiDay``, ``sameDayMultiArea``), capacities under ``volunteers``.
    Never raises: anything malformed or partial returns None.
    """
    if not isinstance(raw, dict):
        return None
    key = _SCHEDULE_KEYS[event_type]
    try:
        match event_type:
            case EventType.ONE_TIME:
                return _parse_one_time(raw.get(key))
            case EventType.MULTI_DAY:
                return _parse_multi_day(raw.get(key))
            case EventType.SAME_DAY_MULTI_AREA:
                # Older documents stored the multi-area shape as ``multiRole``.
                return _parse_multi_area(raw.get(key, raw.get("multiRole")))
    except _MalformedSchedule as exc:
        logger.warning("Ignoring malformed %s schedule: %s", event_type.value, exc)
    return None


def dump_schedule(schedule: Schedule) -> dict[str, Any]:
    """Inverse of ``parse_schedule``."""
    match schedule:
        case OneTimeSchedule(date=day, slot=slot):
            return {"oneTime": {"date": day.isoformat(), **_dump_slot(slot)}}
        case MultiDaySchedule(days=days):
            return {
                "multiDay": [
                    {
                        "date": schedule_day.date.isoformat(),
                        "slots": [_dump_slot(slot) for slot in schedule_day.slots],
                    }
                    for schedule_day in days
                ]
            }
        case SameDayMultiAreaSchedule():
            document: dict[str, Any] = {
                "date": schedule.date.isoformat(),
                "roles": [
                    {"name": role.name, **_dump_slot(role.slot)}
                    for role in schedule.roles
                ],
            }
            if schedule.overall_start is not None:
                document["overallStart"] = schedule.overall_start.strftime("%H:%M")
            if schedule.overall_end is not None:
                document["overallEnd"] = schedule.overall_end.strftime("%H:%M")
            return {"sameDayMultiArea": document}
    raise TypeError(f"Unknown schedule: {schedule!r}")


def _dump_slot(slot: TimeSlot) -> dict[str, Any]:
    return {
        "startTime": slot.start_time.strftime("%H:%M"),
        "endTime": slot.end_time.strftime("%H:%M"),
        "volunteers": slot.capacity.value,
    }


def _parse_one_time(raw: Any) -> OneTimeSchedule:
    doc = _require_dict(raw, "oneTime")
    return OneTimeSchedule(date=_parse_date(doc.get("date")), slot=_parse_slot(doc))


def _parse_multi_day(raw: Any) -> MultiDaySchedule:
    if not isinstance(raw, list) or not raw:
        raise _MalformedSchedule("multiDay must be a non-empty list")
    days = []
    for raw_day in raw:
        doc = _require_dict(raw_day, "day")
        slots = doc.get("slots")
        if not isinstance(slots, list) or not slots:
            raise _MalformedSchedule("day without slots")
        days.append(
            ScheduleDay(
                date=_parse_date(doc.get("date")),
                slots=tuple(_parse_slot(_require_dict(s, "slot")) for s in slots),
            )
        )
    dates = [d.date for d in days]
    if len(set(dates)) != len(dates):
        raise _MalformedSchedule("duplicate day")
    return MultiDaySchedule(days=tuple(days))


def _parse_multi_area(raw: Any) -> SameDayMultiAreaSchedule:
    doc = _require_dict(raw, "sameDayMultiArea")
    raw_roles = doc.get("roles")
    if not isinstance(raw_roles, list) or not raw_roles:
        raise _MalformedSchedule("roles must be a non-empty list")
    roles = []
    for raw_role in raw_roles:
        role_doc = _require_dict(raw_role, "role")
        name = role_doc.get("name")
        if not isinstance(name, str) or not name.strip():
            raise _MalformedSchedule("role without a name")
        roles.append(Role(name=name, slot=_parse_slot(role_doc)))
    names = [role.name for role in roles]
    if len(set(names)) != len(names):
        raise _MalformedSchedule("duplicate role name")
    return SameDayMultiAreaSchedule(
        date=_parse_date(doc.get("date")),
        roles=tuple(roles),
        overall_start=_parse_optional_time(doc.get("overallStart")),
        overall_end=_parse_optional_time(doc.get("overallEnd")),
    )


def _require_dict(raw: Any, what: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise _MalformedSchedule(f"{what} must be an object")
    return raw


def _parse_slot(doc: dict[str, Any]) -> TimeSlot:
    volunteers = doc.get("volunteers")
    if isinstance(volunteers, bool) or not isinstance(volunteers, int):
        raise _MalformedSchedule("volunteers must be an integer")
    try:
        capacity = Capacity(volunteers)
    except ValueError as exc:
        raise _MalformedSchedule(str(exc)) from exc
    return TimeSlot(
        start_time=_parse_time(doc.get("startTime")),
        end_time=_parse_time(doc.get("endTime")),
        capacity=capacity,
    )


def _parse_date(raw: Any) -> date:
    if not isinstance(raw, str):
        raise _MalformedSchedule("date must be a string")
    try:
        # Some documents carry a full timestamp, the calendar day is what counts.
        return date.fromisoformat(raw[:10])
    except ValueError as exc:
        raise _MalformedSchedule(f"invalid date {raw!r}") from exc


def _parse_time(raw: Any) -> time:
    if not isinstance(raw, str):
        raise _MalformedSchedule("time must be a string")
    try:
        return datetime.strptime(raw, "%H:%M").time()
    except ValueError as exc:
        raise _MalformedSchedule(f"invalid time {raw!r}") from exc


def _parse_optional_time(raw: Any) -> time | None:
    if raw is None or raw == "":
        return None
    return _parse_time(raw)
