"""In-memory stores for service tests."""

from collections.abc import Sequence
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime

from volunteering.domain import Project, ProjectId, Signup, SignupId
from volunteering.domain.publication import HoursEntry
from volunteering.domain.value_objects import SignupStatus
from volunteering.stores.interfaces import CertificateIssuer, ProjectStore, SignupStore


class StoreFailure(RuntimeError):
    pass


class InMemoryProjectStore(ProjectStore):
    def __init__(self, *projects: Project) -> None:
        self.projects = {project.id: project for project in projects}
        self.fail_mark_published = False
        self.locks = 0

    def get_project(self, project_id: ProjectId) -> Project | None:
        return self.projects.get(project_id)

    @contextmanager
    def atomic(self):
        snapshot = dict(self.projects)
        try:
            yield
        except BaseException:
            self.projects = snapshot
            raise

    def lock_project(self, project_id: ProjectId) -> None:
        self.locks += 1

    def is_published(self, project_id: ProjectId, session_key: str) -> bool:
        return self.projects[project_id].published.is_published(session_key)

    def mark_published(self, project_id: ProjectId, session_key: str) -> None:
        if self.fail_mark_published:
            raise StoreFailure("could not update project")
        project = self.projects[project_id]
        self.projects[project_id] = replace(
            project, published=project.published.mark(session_key)
        )


class InMemorySignupStore(SignupStore):
    def __init__(self, *signups: Signup) -> None:
        self.signups = {signup.id: signup for signup in signups}
        self.fail_on: set[SignupId] = set()

    def list_signups(self, project_id: ProjectId) -> list[Signup]:
        return [s for s in self.signups.values() if s.project_id == project_id]

    def get_signup(self, signup_id: SignupId) -> Signup | None:
        return self.signups.get(signup_id)

    def save_times(
        self,
        signup_id: SignupId,
        check_in_time: datetime | None,
        check_out_time: datetime | None,
    ) -> Signup:
        if signup_id in self.fail_on:
            raise StoreFailure("write failed")
        updated = replace(
            self.signups[signup_id],
            check_in_time=check_in_time,
            check_out_time=check_out_time,
        )
        self.signups[signup_id] = updated
        return updated

    def record_check_in(self, signup_id: SignupId, check_in_time: datetime) -> Signup:
        updated = replace(
            self.signups[signup_id],
            check_in_time=check_in_time,
            status=SignupStatus.ATTENDED,
        )
        self.signups[signup_id] = updated
        return updated

    def create_signup(self, signup: Signup) -> Signup:
        self.signups[signup.id] = signup
        return signup

    def delete_signup(self, signup_id: SignupId) -> None:
        self.signups.pop(signup_id, None)


class InMemoryCertificateIssuer(CertificateIssuer):
    """Keeps one certificate per (signup, session key), like the unique constraint."""

    def __init__(self) -> None:
        self.certificates: dict[tuple[SignupId, str], HoursEntry] = {}
        self.fail = False
        self.calls = 0

    def issue(
        self, project: Project, session_key: str, entries: Sequence[HoursEntry]
    ) -> int:
        self.calls += 1
        if self.fail:
            raise StoreFailure("certificate insert failed")
        created = 0
        for entry in entries:
            key = (entry.signup_id, session_key)
            if key not in self.certificates:
                self.certificates[key] = entry
                created += 1
        return created
