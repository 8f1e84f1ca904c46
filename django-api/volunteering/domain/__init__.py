from volunteering.domain.models import Certificate, Project, PublicationState, Signup
from volunteering.domain.schedule import Schedule, Session, enumerate_sessions
from volunteering.domain.value_objects import Capacity, EventType, ProjectId, SignupId

__all__ = [
    "Project",
    "Signup",
    "Certificate",
    "PublicationState",
    "Schedule",
    "Session",
    "enumerate_sessions",
    "ProjectId",
    "SignupId",
    "Capacity",
    "EventType",
]
