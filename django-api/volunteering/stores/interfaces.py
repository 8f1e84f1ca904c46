"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from contextlib import AbstractContextManager
from datetime import datetime

from volunteering.domain import Project, ProjectId, Signup, SignupId
from volunteering.domain.publication import HoursEntry


class ProjectStore(ABC):
    """Interface for project persistence operations."""

    @abstractmethod
    def get_project(self, project_id: ProjectId) -> Project | None:
        """Return a project by ID, or None if not found."""
        ...

    @abstractmethod
    def atomic(self) -> AbstractContextManager[None]:
        """Unit of work: everything inside commits together or not at all."""
        ...

    @abstractmethod
    def lock_project(self, project_id: ProjectId) -> None:
        """Lock the project row until the current ``atomic()`` block ends."""
        ...

    @abstractmethod
    def is_published(self, project_id: ProjectId, session_key: str) -> bool:
        """Read the latest publication latch, locking the project row.

        Must be called inside ``atomic()``; a concurrent publisher blocks
        until the current unit of work ends.
        """
        ...

    @abstractmethod
    def mark_published(self, project_id: ProjectId, session_key: str) -> None:
        """Set the publication latch for a session. There is no unset."""
        ...


class SignupStore(ABC):
    """Interface for signup persistence operations."""

    @abstractmethod
    def list_signups(self, project_id: ProjectId) -> list[Signup]:
        """Return all signups of a project, ordered by name."""
        ...

    @abstractmethod
    def get_signup(self, signup_id: SignupId) -> Signup | None:
        """Return a signup by ID, or None if not found."""
        ...

    @abstractmethod
    def save_times(
        self,
        signup_id: SignupId,
        check_in_time: datetime | None,
        check_out_time: datetime | None,
    ) -> Signup:
        """Store check-in/check-out instants and return the updated signup."""
        ...

    @abstractmethod
    def record_check_in(self, signup_id: SignupId, check_in_time: datetime) -> Signup:
        """Store the check-in instant and mark the signup as attended."""
        ...

    @abstractmethod
    def create_signup(self, signup: Signup) -> Signup:
        """Persist a new signup and return it."""
        ...

    @abstractmethod
    def delete_signup(self, signup_id: SignupId) -> None:
        """Remove a signup."""
        ...


class CertificateIssuer(ABC):
    """Creates certificates for published hours.

    Creation must be idempotent per (signup, session_key): re-issuing an
    entry that already has a certificate creates nothing.
    """

    @abstractmethod
    def issue(
        self, project: Project, session_key: str, entries: Sequence[HoursEntry]
    ) -> int:
        """Create certificates and return how many were created."""
        ...
