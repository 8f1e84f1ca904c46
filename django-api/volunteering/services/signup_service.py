"""Signup service - joining and leaving a session.

Logged-in volunteers are approved on signup. Anonymous volunteers start as
pending until they confirm by email.
"""

import logging
import uuid
from datetime import UTC, datetime, tzinfo
from uuid import UUID

from volunteering.domain import Project, Session, Signup, SignupId
from volunteering.domain.clock import Clock, SystemClock, to_wall_clock
from volunteering.domain.errors import (
    AlreadySignedUpError,
    CancellationClosedError,
    SessionFullError,
    SignupClosedError,
    SignupNotFoundError,
)
from volunteering.domain.lookup import find_session, remaining_capacity, signups_for_session
from volunteering.domain.phases import derive_project_status
from volunteering.domain.value_objects import ProjectStatus, SignupStatus
from volunteering.domain.windows import is_signup_open
from volunteering.services.lookups import load_project, load_session, parse_signup_id
from volunteering.stores.interfaces import ProjectStore, SignupStore

logger = logging.getLogger(__name__)

CLOSED_PROJECT_STATUSES = frozenset({ProjectStatus.CANCELLED, ProjectStatus.COMPLETED})


class SignupService:
    """Service for creating and cancelling signups."""

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

    def sign_up(
        self,
        project_id: str,
        session_id: str,
        user_id: UUID | None = None,
        name: str | None = None,
        email: str | None = None,
    ) -> Signup:
        """Sign a volunteer up for one session.

        Without ``user_id`` the signup is anonymous and identified by email.
        The signup is stored under the canonical session id even when
        addressed by an alias.

        Raises:
            InvalidProjectIdError: If the project_id is not a valid UUID.
            ProjectNotFoundError: If the project does not exist.
            SessionUnavailableError: If the session id matches no session.
            SignupClosedError: If the project ended or the signup cutoff passed.
            AlreadySignedUpError: If the volunteer already holds a signup.
            SessionFullError: If no seat is left.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        now = to_wall_clock(self._clock.now(), self._local_tz)
        if derive_project_status(project, now) in CLOSED_PROJECT_STATUSES:
            raise SignupClosedError()
        if not is_signup_open(session, now):
            raise SignupClosedError()

        anonymous = user_id is None
        with self._projects.atomic():
            self._projects.lock_project(project.id)
            signups = self._signups.list_signups(project.id)
            existing = signups_for_session(project, session, signups)
            if any(_same_volunteer(s, user_id, email) for s in existing):
                raise AlreadySignedUpError(session.session_id)
            if remaining_capacity(project, signups).get(session.session_id, 0) <= 0:
                raise SessionFullError(session.session_id)
            signup = self._signups.create_signup(
                Signup(
                    id=SignupId(uuid.uuid4()),
                    project_id=project.id,
                    schedule_id=session.session_id,
                    status=SignupStatus.PENDING if anonymous else SignupStatus.APPROVED,
                    user_id=user_id,
                    anonymous_signup_id=uuid.uuid4() if anonymous else None,
                    name=name,
                    email=email,
                )
            )

        logger.info(
            "Signup %s created for session %s of project %s (%s)",
            signup.id,
            session.session_id,
            project.id,
            signup.status.value,
        )
        return signup

    def cancel_signup(self, project_id: str, signup_id: str) -> None:
        """Withdraw a signup before its session starts.

        A signup whose session no longer exists in the schedule can always be
        cancelled.

        Raises:
            InvalidProjectIdError: If the project_id is not a valid UUID.
            ProjectNotFoundError: If the project does not exist.
            SignupNotFoundError: If the signup is not part of the project.
            CancellationClosedError: If the volunteer checked in or the session started.
        """
        project = load_project(self._projects, project_id)
        signup = self._signups.get_signup(parse_signup_id(signup_id))
        if signup is None or signup.project_id != project.id:
            raise SignupNotFoundError(signup_id)
        session = find_session(project, signup.schedule_id)
        if signup.check_in_time is not None or self._has_started(project, session):
            raise CancellationClosedError(signup_id)
        self._signups.delete_signup(signup.id)
        logger.info("Signup %s cancelled for project %s", signup.id, project.id)

    def _has_started(self, project: Project, session: Session | None) -> bool:
        if session is None:
            return False
        if project.published.is_published(session.session_id):
            return True
        return to_wall_clock(self._clock.now(), self._local_tz) >= session.starts_at


def _same_volunteer(signup: Signup, user_id: UUID | None, email: str | None) -> bool:
    if user_id is not None:
        return signup.user_id == user_id
    return (
        signup.user_id is None
        and email is not None
        and signup.email is not None
        and signup.email.lower() == email.lower()
    )
