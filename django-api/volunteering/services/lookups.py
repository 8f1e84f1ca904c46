"""Loading helpers shared by the services."""

import logging

from volunteering.domain import Project, ProjectId, Session, SignupId
from volunteering.domain.errors import (
    InvalidProjectIdError,
    ProjectNotFoundError,
    SessionUnavailableError,
    SignupNotFoundError,
)
from volunteering.domain.lookup import find_session
from volunteering.stores.interfaces import ProjectStore

logger = logging.getLogger(__name__)


def parse_project_id(project_id: str) -> ProjectId:
    try:
        return ProjectId.from_string(project_id)
    except (ValueError, TypeError, AttributeError) as exc:
        raise InvalidProjectIdError() from exc


def parse_signup_id(signup_id: str) -> SignupId:
    try:
        return SignupId.from_string(signup_id)
    except (ValueError, TypeError, AttributeError) as exc:
        raise SignupNotFoundError(str(signup_id)) from exc


def load_project(store: ProjectStore, project_id: str) -> Project:
    """Return a project by ID.

    Raises:
        InvalidProjectIdError: If the project_id is not a valid UUID.
        ProjectNotFoundError: If the project does not exist.
    """
    project = store.get_project(parse_project_id(project_id))
    if project is None:
        raise ProjectNotFoundError(project_id)
    return project


def load_session(project: Project, session_id: str) -> Session:
    """Return the session addressed by a canonical or legacy id.

    Raises:
        SessionUnavailableError: If no session of the project matches.
    """
    session = find_session(project, session_id)
    if session is None:
        logger.warning(
            "Session %r unavailable for project %s", session_id, project.id
        )
        raise SessionUnavailableError(session_id)
    return session
