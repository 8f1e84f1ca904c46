"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Self
from uuid import UUID


@dataclass(frozen=True)
class ProjectId:
    """Unique identifier for a Project."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SignupId:
    """Unique identifier for a Signup."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing volunteer capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")


class EventType(Enum):
    """Scheduling shape of a project. Values match the stored documents."""

    ONE_TIME = "oneTime"
    MULTI_DAY = "multiDay"
    SAME_DAY_MULTI_AREA = "sameDayMultiArea"


class ProjectStatus(Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class VerificationMethod(Enum):
    QR_CODE = "qr-code"
    MANUAL = "manual"
    AUTO = "auto"
    SIGNUP_ONLY = "signup-only"


class SignupStatus(Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ATTENDED = "attended"


class PublicationTrigger(Enum):
    """Who asked for hours to be published."""

    MANUAL = "manual"
    AUTOMATIC = "automatic"
