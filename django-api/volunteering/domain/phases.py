"""Lifecycle phases of sessions and projects.

A session moves through::

    UPCOMING -> CHECK_IN_OPEN -> ACTIVE -> ATTENDANCE_EDITING -> CLOSED
                                                   \\-> PUBLISHED

``PUBLISHED`` overrides any time based phase once the session's publication
latch is set. Nothing here is cached: the phase depends on ``now`` and must
be recomputed on every evaluation.
"""

from collections.abc import Iterable
from datetime import datetime, timedelta
from enum import Enum

from volunteering.domain.models import Project
from volunteering.domain.schedule import enumerate_sessions
from volunteering.domain.value_objects import ProjectStatus
from volunteering.domain.windows import SessionWindows

DELETE_LOCK_BEFORE_START = timedelta(hours=24)
DELETE_LOCK_AFTER_END = timedelta(hours=48)


class Phase(Enum):
    UPCOMING = "upcoming"
    CHECK_IN_OPEN = "check-in-open"
    ACTIVE = "active"
    ATTENDANCE_EDITING = "attendance-editing"
    CLOSED = "closed"
    PUBLISHED = "published"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.CLOSED, Phase.PUBLISHED)


_RANKS = {phase: index for index, phase in enumerate(Phase)}


def classify(windows: SessionWindows, now: datetime, published: bool) -> Phase:
    """Return the phase of a session at ``now``."""
    if published:
        return Phase.PUBLISHED
    if now >= windows.editing_deadline:
        return Phase.CLOSED
    if now >= windows.active_end:
        return Phase.ATTENDANCE_EDITING
    if now >= windows.active_start:
        return Phase.ACTIVE
    if now >= windows.check_in_open:
        return Phase.CHECK_IN_OPEN
    return Phase.UPCOMING


def aggregate_phase(phases: Iterable[Phase]) -> Phase | None:
    """Project level phase: the least advanced session wins.

    Terminal sessions only count when every session is terminal, and then a
    session that closed without publication outranks published ones.
    """
    phases = list(phases)
    if not phases:
        return None
    open_phases = [phase for phase in phases if not phase.is_terminal]
    if open_phases:
        return min(open_phases, key=lambda phase: phase.rank)
    if Phase.CLOSED in phases:
        return Phase.CLOSED
    return Phase.PUBLISHED


def project_start(project: Project) -> datetime | None:
    sessions = enumerate_sessions(project)
    return min((s.starts_at for s in sessions), default=None)


def project_end(project: Project) -> datetime | None:
    sessions = enumerate_sessions(project)
    return max((s.ends_at for s in sessions), default=None)


def derive_project_status(project: Project, now: datetime) -> ProjectStatus:
    """Status of a project at ``now``; cancellation is sticky."""
    if project.status is ProjectStatus.CANCELLED:
        return ProjectStatus.CANCELLED
    start, end = project_start(project), project_end(project)
    if start is None or end is None:
        return project.status
    if now > end:
        return ProjectStatus.COMPLETED
    if now >= start:
        return ProjectStatus.IN_PROGRESS
    return ProjectStatus.UPCOMING


def can_cancel_project(project: Project, now: datetime) -> bool:
    if project.status in (ProjectStatus.CANCELLED, ProjectStatus.COMPLETED):
        return False
    start = project_start(project)
    return start is not None and now <= start


def can_delete_project(project: Project, now: datetime) -> bool:
    """Projects are locked from 24h before start until 48h after end."""
    start, end = project_start(project), project_end(project)
    if start is None or end is None:
        return True
    return not (start - DELETE_LOCK_BEFORE_START <= now <= end + DELETE_LOCK_AFTER_END)
