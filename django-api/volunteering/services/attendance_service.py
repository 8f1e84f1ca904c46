"""Attendance service - check-in, check-out and hours corrections."""

import logging
from dataclasses import dataclass, replace
from datetime import UTC, datetime, tzinfo

from volunteering.domain import Project, Session, Signup
from volunteering.domain.clock import Clock, SystemClock, to_wall_clock
from volunteering.domain.durations import (
    Adjustment,
    DurationResult,
    adjust_check_outs,
    reconcile,
)
from volunteering.domain.errors import (
    CheckInClosedError,
    NotCheckedInError,
    SessionLockedError,
    SignupNotFoundError,
)
from volunteering.domain.lookup import resolve_session_id, signups_for_session
from volunteering.domain.phases import Phase, classify
from volunteering.domain.windows import compute_windows, is_addressable
from volunteering.services.lookups import load_project, load_session, parse_signup_id
from volunteering.stores.interfaces import ProjectStore, SignupStore

logger = logging.getLogger(__name__)

ADJUSTMENT_NOT_STORED = "could not store adjusted check-out"

EDITABLE_PHASES = frozenset(
    {Phase.UPCOMING, Phase.CHECK_IN_OPEN, Phase.ACTIVE, Phase.ATTENDANCE_EDITING}
)


@dataclass(frozen=True)
class SignupHours:
    signup: Signup
    duration: DurationResult


class AttendanceService:
    """Service for recording and correcting attendance of one session."""

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

    def session_hours(self, project_id: str, session_id: str) -> list[SignupHours]:
        """Return the session's signups with their reconciled durations.

        Only signups that checked in are listed.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        return [
            SignupHours(
                signup=signup,
                duration=reconcile(signup.check_in_time, signup.check_out_time),
            )
            for signup in self._session_signups(project, session)
            if signup.check_in_time is not None
        ]

    def check_in(self, project_id: str, session_id: str, signup_id: str) -> Signup:
        """Record a check-in for a signup of the session.

        Checking in twice keeps the first check-in time.

        Raises:
            SessionUnavailableError: If the session id matches no session.
            SignupNotFoundError: If the signup is not part of the session.
            SessionLockedError: If the session's hours are published.
            CheckInClosedError: If the session is not addressable now.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        signup = self._load_signup(project, session, signup_id)
        if signup.check_in_time is not None:
            logger.info("Signup %s already checked in at %s", signup.id, signup.check_in_time)
            return signup
        now = self._clock.now()
        with self._projects.atomic():
            if self._is_published(project, session):
                raise SessionLockedError(session.session_id)
            if not is_addressable(session, to_wall_clock(now, self._local_tz)):
                raise CheckInClosedError()
            checked_in = self._signups.record_check_in(signup.id, now)
        logger.info("Signup %s checked in to session %s", signup.id, session.session_id)
        return checked_in

    def check_out(self, project_id: str, session_id: str, signup_id: str) -> Signup:
        """Record a check-out for a signup that checked in.

        Raises:
            SessionUnavailableError: If the session id matches no session.
            SignupNotFoundError: If the signup is not part of the session.
            SessionLockedError: If the session is published or closed.
            NotCheckedInError: If the signup never checked in.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        signup = self._load_signup(project, session, signup_id)
        with self._projects.atomic():
            self._ensure_editable(project, session)
            if signup.check_in_time is None:
                raise NotCheckedInError()
            checked_out = self._signups.save_times(
                signup.id, signup.check_in_time, self._clock.now()
            )
        logger.info("Signup %s checked out of session %s", signup.id, session.session_id)
        return checked_out

    def update_times(
        self,
        project_id: str,
        session_id: str,
        signup_id: str,
        check_in_time: datetime | None,
        check_out_time: datetime | None,
    ) -> SignupHours:
        """Correct a signup's recorded instants.

        The new pair is stored even when invalid; the returned duration
        carries the reason.

        Raises:
            SessionUnavailableError: If the session id matches no session.
            SignupNotFoundError: If the signup is not part of the session.
            SessionLockedError: If the session is published or closed.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        signup = self._load_signup(project, session, signup_id)
        with self._projects.atomic():
            self._ensure_editable(project, session)
            updated = self._signups.save_times(signup.id, check_in_time, check_out_time)
        duration = reconcile(updated.check_in_time, updated.check_out_time)
        if not duration.is_valid:
            logger.warning("Signup %s has invalid hours: %s", signup.id, duration.reason)
        return SignupHours(signup=updated, duration=duration)

    def bulk_adjust(
        self,
        project_id: str,
        session_id: str,
        offset_minutes: int,
        signup_ids: list[str] | None = None,
    ) -> list[Adjustment]:
        """Shift the check-out of the session's checked-in signups.

        Each signup is adjusted and stored on its own; the result reports
        every signup, including those that are now invalid, had no
        check-out to shift, or could not be stored.

        Raises:
            SessionUnavailableError: If the session id matches no session.
            SignupNotFoundError: If a requested signup is not part of the session.
            SessionLockedError: If the session is published or closed.
        """
        project = load_project(self._projects, project_id)
        session = load_session(project, session_id)
        with self._projects.atomic():
            self._ensure_editable(project, session)
            signups = [
                s for s in self._session_signups(project, session) if s.check_in_time is not None
            ]
            if signup_ids is not None:
                by_id = {str(s.id): s for s in signups}
                missing = [signup_id for signup_id in signup_ids if signup_id not in by_id]
                if missing:
                    raise SignupNotFoundError(missing[0])
                signups = [by_id[signup_id] for signup_id in signup_ids]

            by_signup = {s.id: s for s in signups}
            adjustments = [
                self._store_adjustment(by_signup[adjustment.signup_id], adjustment)
                if adjustment.applied
                else adjustment
                for adjustment in adjust_check_outs(signups, offset_minutes)
            ]

        logger.info(
            "Shifted %d check-outs of session %s by %d minutes (%d now invalid, %d not stored)",
            sum(1 for a in adjustments if a.stored),
            session.session_id,
            offset_minutes,
            sum(1 for a in adjustments if a.applied and not a.result.is_valid),
            sum(1 for a in adjustments if a.error is not None),
        )
        return adjustments

    def _store_adjustment(self, signup: Signup, adjustment: Adjustment) -> Adjustment:
        try:
            with self._projects.atomic():
                self._signups.save_times(
                    signup.id, signup.check_in_time, adjustment.check_out_time
                )
        except Exception:
            logger.exception("Storing adjusted check-out of signup %s failed", signup.id)
            return replace(adjustment, error=ADJUSTMENT_NOT_STORED)
        return replace(adjustment, stored=True)

    def _session_signups(self, project: Project, session: Session) -> list[Signup]:
        return signups_for_session(
            project, session, self._signups.list_signups(project.id)
        )

    def _load_signup(self, project: Project, session: Session, signup_id: str) -> Signup:
        signup = self._signups.get_signup(parse_signup_id(signup_id))
        if (
            signup is None
            or signup.project_id != project.id
            or resolve_session_id(project, signup.schedule_id) != session.session_id
        ):
            raise SignupNotFoundError(signup_id)
        return signup

    def _is_published(self, project: Project, session: Session) -> bool:
        """Latch from the loaded project, confirmed under the project row lock.

        Must run inside ``atomic()``: the loaded project may come from a
        cache that has not yet seen another worker's publication.
        """
        if project.published.is_published(session.session_id):
            return True
        return self._projects.is_published(project.id, session.session_id)

    def _ensure_editable(self, project: Project, session: Session) -> None:
        now = to_wall_clock(self._clock.now(), self._local_tz)
        published = self._is_published(project, session)
        phase = classify(compute_windows(session), now, published)
        if phase not in EDITABLE_PHASES:
            raise SessionLockedError(session.session_id)
