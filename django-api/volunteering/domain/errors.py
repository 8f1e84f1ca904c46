"""Domain error codes for the volunteering module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    PROJECT_NOT_FOUND = "PROJECT_NOT_FOUND"
    INVALID_PROJECT_ID = "INVALID_PROJECT_ID"
    SESSION_UNAVAILABLE = "SESSION_UNAVAILABLE"
    SIGNUP_NOT_FOUND = "SIGNUP_NOT_FOUND"
    CHECK_IN_CLOSED = "CHECK_IN_CLOSED"
    NOT_CHECKED_IN = "NOT_CHECKED_IN"
    SESSION_LOCKED = "SESSION_LOCKED"
    SESSION_NOT_PUBLISHABLE = "SESSION_NOT_PUBLISHABLE"
    PUBLICATION_FAILED = "PUBLICATION_FAILED"
    SIGNUP_CLOSED = "SIGNUP_CLOSED"
    SESSION_FULL = "SESSION_FULL"
    ALREADY_SIGNED_UP = "ALREADY_SIGNED_UP"
    CANCELLATION_CLOSED = "CANCELLATION_CLOSED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ProjectNotFoundError(DomainError):
    """Raised when a project is not found."""

    def __init__(self, project_id: str) -> None:
        super().__init__(
            code=ErrorCode.PROJECT_NOT_FOUND,
            message="Project not found",
        )
        self.project_id = project_id


class InvalidProjectIdError(DomainError):
    """Raised when a project ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_PROJECT_ID,
            message="Invalid project ID format",
        )


class SessionUnavailableError(DomainError):
    """Raised when a session id resolves to no session of the project.

    Happens legitimately when a schedule was edited after the id was handed
    out, so callers fall back to the project-level view.
    """

    def __init__(self, session_id: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_UNAVAILABLE,
            message="Session unavailable",
        )
        self.session_id = session_id


class SignupNotFoundError(DomainError):
    """Raised when a signup does not belong to the addressed session."""

    def __init__(self, signup_id: str) -> None:
        super().__init__(
            code=ErrorCode.SIGNUP_NOT_FOUND,
            message="Signup not found",
        )
        self.signup_id = signup_id


class CheckInClosedError(DomainError):
    """Raised when a check-in is attempted outside the attendance window."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.CHECK_IN_CLOSED,
            message="Check-in is not open for this session",
        )


class NotCheckedInError(DomainError):
    """Raised when checking out a signup that never checked in."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_CHECKED_IN,
            message="Signup has not checked in",
        )


class SessionLockedError(DomainError):
    """Raised when attendance of a published or closed session is modified."""

    def __init__(self, session_key: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_LOCKED,
            message="Attendance for this session can no longer be changed",
        )
        self.session_key = session_key


class SessionNotPublishableError(DomainError):
    """Raised when publishing a session that is not in its editing window."""

    def __init__(self, phase: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_NOT_PUBLISHABLE,
            message=f"Hours cannot be published while the session is {phase}",
        )
        self.phase = phase


class PublicationFailedError(DomainError):
    """Raised when certificates or the publication latch could not be stored.

    The latch is left unset, so the publication can be retried.
    """

    def __init__(self, session_key: str) -> None:
        super().__init__(
            code=ErrorCode.PUBLICATION_FAILED,
            message="Publishing volunteer hours failed, please retry",
        )
        self.session_key = session_key


class SignupClosedError(DomainError):
    """Raised when signing up after the cutoff or for an ended project."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.SIGNUP_CLOSED,
            message="Signups for this session are closed",
        )


class SessionFullError(DomainError):
    """Raised when every seat of a session is taken."""

    def __init__(self, session_key: str) -> None:
        super().__init__(
            code=ErrorCode.SESSION_FULL,
            message="This session is full",
        )
        self.session_key = session_key


class AlreadySignedUpError(DomainError):
    """Raised when the volunteer already holds a signup for the session.

    Rejected signups count too: a rejected volunteer cannot sign up again.
    """

    def __init__(self, session_key: str) -> None:
        super().__init__(
            code=ErrorCode.ALREADY_SIGNED_UP,
            message="You have already signed up for this session",
        )
        self.session_key = session_key


class CancellationClosedError(DomainError):
    """Raised when cancelling a signup whose session has started or checked in."""

    def __init__(self, signup_id: str) -> None:
        super().__init__(
            code=ErrorCode.CANCELLATION_CLOSED,
            message="This signup can no longer be cancelled",
        )
        self.signup_id = signup_id
