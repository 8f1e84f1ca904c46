"""Session service - read side of the session lifecycle.

Services:
- Depend only on interfaces (stores)
- Validate domain invariants
- Perform orchestration and error mapping
- Return domain models or domain errors

Phases are recomputed from the injected clock on every call.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo

from volunteering.domain import Project, Session, enumerate_sessions
from volunteering.domain.clock import Clock, SystemClock, to_wall_clock
from volunteering.domain.lookup import remaining_capacity
from volunteering.domain.phases import (
    Phase,
    aggregate_phase,
    can_cancel_project,
    can_delete_project,
    classify,
    derive_project_status,
)
from volunteering.domain.value_objects import ProjectStatus
from volunteering.domain.windows import (
    SessionWindows,
    compute_windows,
    is_addressable,
    is_signup_open,
)
from volunteering.services.lookups import load_project, load_session
from volunteering.stores.interfaces import ProjectStore, SignupStore


@dataclass(frozen=True)
class SessionView:
    """A session with everything derived from it at one instant."""

    session: Session
    windows: SessionWindows
    phase: Phase
    published: bool
    addressable: bool
    signup_open: bool
    remaining_capacity: int


@dataclass(frozen=True)
class ProjectOverview:
    project: Project
    phase: Phase | None
    status: ProjectStatus
    can_cancel: bool
    can_delete: bool
    sessions: tuple[SessionView, ...]


class SessionService:
    """Service for session timeline operations."""

    def __init__(
        self,
        projects: ProjectStore,
        signups: SignupStore,
        clock: Clock | None = None,
        local_tz: tzinfo = UTC,
    ) -> None:
        self._projects = projects
        self._signups = signups
        self._clock = clock or SystemClock()
        self._local_tz = local_tz

    def list_sessions(self, project_id: str) -> list[SessionView]:
        """Return every session of a project in schedule order.

        Raises:
            InvalidProjectIdError: If the project_id is not a valid UUID.
            ProjectNotFoundError: If the project does not exist.
        """
        project = load_project(self._projects, project_id)
        now = to_wall_clock(self._clock.now(), self._local_tz)
        return list(self._views(project, now))

    def get_session(self, project_id: str, session_id: str) -> SessionView:
        """Return one session, addressed by canonical or legacy id.

        Raises:
            InvalidProjectIdError: If the project_id is not a valid UUID.
            ProjectNotFoundError: If the project does not exist.
            SessionUnavailableError: If the session id matches no session.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        now = to_wall_clock(self._clock.now(), self._local_tz)
        capacity = remaining_capacity(project, self._signups.list_signups(project.id))
        return self._view(project, session, now, capacity)

    def project_overview(self, project_id: str) -> ProjectOverview:
        """Return the aggregate phase and derived status of a project.

        Raises:
            InvalidProjectIdError: If the project_id is not a valid UUID.
            ProjectNotFoundError: If the project does not exist.
        """
        project = load_project(self._projects, project_id)
        now = to_wall_clock(self._clock.now(), self._local_tz)
        views = self._views(project, now)
        return ProjectOverview(
            project=project,
            phase=aggregate_phase(view.phase for view in views),
            status=derive_project_status(project, now),
            can_cancel=can_cancel_project(project, now),
            can_delete=can_delete_project(project, now),
            sessions=views,
        )

    def _views(self, project: Project, now: datetime) -> tuple[SessionView, ...]:
        capacity = remaining_capacity(project, self._signups.list_signups(project.id))
        return tuple(
            self._view(project, session, now, capacity)
            for session in enumerate_sessions(project)
        )

    @staticmethod
    def _view(
        project: Project, session: Session, now: datetime, capacity: dict[str, int]
    ) -> SessionView:
        windows = compute_windows(session)
        published = project.published.is_published(session.session_id)
        return SessionView(
            session=session,
            windows=windows,
            phase=classify(windows, now, published),
            published=published,
            addressable=is_addressable(session, now),
            signup_open=is_signup_open(session, now),
            remaining_capacity=capacity.get(session.session_id, 0),
        )
