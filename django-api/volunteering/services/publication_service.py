"""Publication service - the one-way gate from editable to published hours.

Publishing a session issues one certificate per volunteer with valid hours
and sets the session's publication latch. Both happen in one unit of work:
if certificate creation fails the latch stays unset and the publication can
be retried. Publishing an already published session is a successful no-op,
since a manual publication may race the automatic one.
"""

import logging
from datetime import UTC, tzinfo

from volunteering.domain.clock import Clock, SystemClock, to_wall_clock
from volunteering.domain.errors import (
    DomainError,
    PublicationFailedError,
    SessionNotPublishableError,
)
from volunteering.domain.lookup import signups_for_session
from volunteering.domain.phases import Phase, classify
from volunteering.domain.publication import PublicationResult, build_batch
from volunteering.domain.value_objects import PublicationTrigger
from volunteering.domain.windows import compute_windows
from volunteering.services.lookups import load_project, load_session
from volunteering.stores.interfaces import CertificateIssuer, ProjectStore, SignupStore

logger = logging.getLogger(__name__)

# The automatic publisher runs once the editing deadline has passed.
PUBLISHABLE_PHASES = {
    PublicationTrigger.MANUAL: frozenset({Phase.ATTENDANCE_EDITING}),
    PublicationTrigger.AUTOMATIC: frozenset({Phase.ATTENDANCE_EDITING, Phase.CLOSED}),
}


class PublicationService:
    """Service for publishing a session's volunteer hours."""

    def __init__(
        self,
        projects: ProjectStore,
        signups: SignupStore,
        certificates: CertificateIssuer,
        clock: Clock | None = None,
        local_tz: tzinfo = UTC,
    ) -> None:
        self._projects = projects
        self._signups = signups
        self._certificates = certificates
        self._clock = clock or SystemClock()
        self._local_tz = local_tz

    def publish_session(
        self,
        project_id: str,
        session_id: str,
        trigger: PublicationTrigger = PublicationTrigger.MANUAL,
    ) -> PublicationResult:
        """Publish the hours of one session.

        Raises:
            InvalidProjectIdError: If the project_id is not a valid UUID.
            ProjectNotFoundError: If the project does not exist.
            SessionUnavailableError: If the session id matches no session.
            SessionNotPublishableError: If the session is not in a publishable phase.
            PublicationFailedError: If certificates or the latch could not be stored.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        session_key = session.session_id

        if project.published.is_published(session_key):
            return self._already_published(project_id, session_key)

        now = to_wall_clock(self._clock.now(), self._local_tz)
        phase = classify(compute_windows(session), now, published=False)
        if phase not in PUBLISHABLE_PHASES[trigger]:
            raise SessionNotPublishableError(phase.value)

        batch = build_batch(
            signups_for_session(project, session, self._signups.list_signups(project.id))
        )
        if batch.excluded:
            logger.warning(
                "Excluding %d signups with invalid hours from session %s of project %s",
                batch.excluded,
                session_key,
                project_id,
            )

        try:
            with self._projects.atomic():
                if self._projects.is_published(project.id, session_key):
                    return self._already_published(project_id, session_key)
                created = self._certificates.issue(project, session_key, batch.entries)
                self._projects.mark_published(project.id, session_key)
        except DomainError:
            raise
        except Exception as exc:
            logger.exception(
                "Publishing session %s of project %s failed", session_key, project_id
            )
            raise PublicationFailedError(session_key) from exc

        logger.info(
            "Published session %s of project %s (%s): %d certificates created",
            session_key,
            project_id,
            trigger.value,
            created,
        )
        return PublicationResult(
            session_key=session_key, created=created, excluded=batch.excluded
        )

    @staticmethod
    def _already_published(project_id: str, session_key: str) -> PublicationResult:
        logger.info("Session %s of project %s already published", session_key, project_id)
        return PublicationResult(
            session_key=session_key, created=0, excluded=0, already_published=True
        )
