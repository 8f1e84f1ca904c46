"""Read-through cache in front of a ProjectStore.

Only parsed projects are cached. Anything derived from the current time
(phases, addressability) is computed by the services on every call.
"""

from contextlib import AbstractContextManager

from django.conf import settings
from django.core.cache import cache

from volunteering.domain import Project, ProjectId
from volunteering.stores.interfaces import ProjectStore


def project_cache_key(project_id: object) -> str:
    return f"projects:{project_id}"


class CachedProjectStore(ProjectStore):
    """Caches ``get_project``; latch reads and writes go to the inner store."""

    def __init__(self, inner: ProjectStore, timeout: int | None = None) -> None:
        self._inner = inner
        self._timeout = (
            timeout if timeout is not None else settings.VOLUNTEERING_CACHE_TIMEOUT
        )

    def get_project(self, project_id: ProjectId) -> Project | None:
        key = project_cache_key(project_id.value)
        project = cache.get(key)
        if project is None:
            project = self._inner.get_project(project_id)
            if project is not None:
                cache.set(key, project, self._timeout)
        return project

    def atomic(self) -> AbstractContextManager[None]:
        return self._inner.atomic()

    def lock_project(self, project_id: ProjectId) -> None:
        self._inner.lock_project(project_id)

    def is_published(self, project_id: ProjectId, session_key: str) -> bool:
        return self._inner.is_published(project_id, session_key)

    def mark_published(self, project_id: ProjectId, session_key: str) -> None:
        self._inner.mark_published(project_id, session_key)
