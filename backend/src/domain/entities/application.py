"""
Application Domain Entities
Immutable job application and its append-only status history
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence, Tuple

from core.exceptions import ConsistencyViolationException
from ..enums import ApplicationType, InterviewType, StatusType, TestType


@dataclass(frozen=True)
class Application:
    """Job application domain entity - immutable"""

    id: Optional[int]
    company: str
    position: str
    created_by: int
    created_at: datetime
    updated_at: datetime

    website: Optional[str] = None
    application_type: Optional[ApplicationType] = None

    # Soft delete
    deleted: bool = False
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validate application data"""
        if not self.company or not self.company.strip():
            raise ValueError("Company name cannot be empty")
        if not self.position or not self.position.strip():
            raise ValueError("Position cannot be empty")

    def __str__(self) -> str:
        return f"Application({self.id}, {self.company} - {self.position})"


@dataclass(frozen=True)
class ApplicationStatusEvent:
    """One immutable entry in an application's lifecycle log"""

    id: Optional[int]
    application_id: int
    status_type: StatusType
    created_by: int
    created_at: datetime

    test_type: Optional[TestType] = None
    interview_type: Optional[InterviewType] = None
    notes: Optional[str] = None

    def __post_init__(self):
        """Sub-types are only meaningful for their own stage"""
        if self.test_type is not None and self.status_type != StatusType.TEST:
            raise ValueError("test_type is only valid for Test status")
        if self.interview_type is not None and self.status_type != StatusType.INTERVIEW:
            raise ValueError("interview_type is only valid for Interview status")

    @property
    def sort_key(self) -> Tuple[datetime, int]:
        """Chronological position; same-timestamp events ordered by id"""
        return (self.created_at, self.id or 0)


def resolve_latest_event(
    events: Sequence[ApplicationStatusEvent],
    application_id: Optional[int] = None,
) -> ApplicationStatusEvent:
    """
    Latest event of one application's history.

    The event with the greatest created_at wins; ties go to the highest id.
    An empty history breaks the "every application has an Applied event"
    invariant and is reported, never defaulted.
    """
    if not events:
        raise ConsistencyViolationException(application_id)
    return max(events, key=lambda event: event.sort_key)


def latest_status(
    events: Sequence[ApplicationStatusEvent],
    application_id: Optional[int] = None,
) -> StatusType:
    """Current status derived from the history"""
    return resolve_latest_event(events, application_id).status_type


@dataclass(frozen=True)
class ApplicationWithHistory:
    """Application together with its chronologically ordered status history"""

    application: Application
    status_history: Tuple[ApplicationStatusEvent, ...] = field(default_factory=tuple)

    @property
    def current_status(self) -> StatusType:
        return latest_status(self.status_history, self.application.id)
