"""Time boundaries gating each phase of a session.

Boundaries are pure functions of a session's start and end. The current
time is never captured here; callers pass ``now`` explicitly.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from volunteering.domain.schedule import Session

SIGNUP_CUTOFF_BEFORE_START = timedelta(hours=1)
CHECK_IN_OPENS_BEFORE_START = timedelta(hours=1)
# Attendance management and QR check-in open earlier than the general
# check-in shown on the timeline.
ATTENDANCE_OPENS_BEFORE_START = timedelta(hours=2)
ADDRESSABLE_AFTER_END = timedelta(hours=2)
EDITING_WINDOW_AFTER_END = timedelta(hours=48)


@dataclass(frozen=True)
class SessionWindows:
    """Boundary instants of one session, in wall-clock time."""

    signup_cutoff: datetime
    attendance_signup_cutoff: datetime
    check_in_open: datetime
    attendance_check_in_open: datetime
    active_start: datetime
    active_end: datetime
    editing_deadline: datetime
    addressable_until: datetime


def compute_windows(session: Session) -> SessionWindows:
    start, end = session.starts_at, session.ends_at
    return SessionWindows(
        signup_cutoff=start - SIGNUP_CUTOFF_BEFORE_START,
        attendance_signup_cutoff=start - ATTENDANCE_OPENS_BEFORE_START,
        check_in_open=start - CHECK_IN_OPENS_BEFORE_START,
        attendance_check_in_open=start - ATTENDANCE_OPENS_BEFORE_START,
        active_start=start,
        active_end=end,
        editing_deadline=end + EDITING_WINDOW_AFTER_END,
        addressable_until=end + ADDRESSABLE_AFTER_END,
    )


def is_addressable(session: Session, now: datetime) -> bool:
    """Whether the session's QR code / deep link may be used at ``now``."""
    windows = compute_windows(session)
    return windows.attendance_check_in_open <= now <= windows.addressable_until


def is_signup_open(session: Session, now: datetime) -> bool:
    return now < compute_windows(session).signup_cutoff
