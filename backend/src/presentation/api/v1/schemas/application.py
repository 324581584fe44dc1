"""
Application Request/Response Schemas
Pydantic v2 models; application payloads use camelCase keys
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from domain.entities import ApplicationStatusEvent, ApplicationWithHistory
from domain.enums import ApplicationType, InterviewType, StatusType, TestType


class CamelModel(BaseModel):
    """Serializes with camelCase aliases, accepts either spelling on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateApplicationRequest(CamelModel):
    """New application; the Applied event is recorded automatically"""

    company: str = Field(..., min_length=1, max_length=70)
    position: str = Field(..., min_length=1, max_length=100)
    website: Optional[str] = Field(None, max_length=255)
    application_type: Optional[ApplicationType] = None


class AddStatusRequest(CamelModel):
    """Append a status event to an application"""

    application_id: int
    status_type: StatusType
    test_type: Optional[TestType] = None
    interview_type: Optional[InterviewType] = None
    notes: Optional[str] = None


class StatusEventResponse(CamelModel):
    id: int
    application_id: int
    status_type: StatusType
    test_type: Optional[TestType] = None
    interview_type: Optional[InterviewType] = None
    notes: Optional[str] = None
    created_by: int
    created_at: datetime

    @classmethod
    def from_entity(cls, event: ApplicationStatusEvent) -> "StatusEventResponse":
        return cls(
            id=event.id,
            application_id=event.application_id,
            status_type=event.status_type,
            test_type=event.test_type,
            interview_type=event.interview_type,
            notes=event.notes,
            created_by=event.created_by,
            created_at=event.created_at,
        )


class ApplicationResponse(CamelModel):
    """Application with derived current status and full history"""

    id: int
    company: str
    position: str
    website: Optional[str] = None
    application_type: Optional[ApplicationType] = None
    created_by: int
    created_at: datetime
    updated_at: datetime
    current_status: StatusType
    status_history: List[StatusEventResponse]

    @classmethod
    def from_entity(cls, item: ApplicationWithHistory) -> "ApplicationResponse":
        application = item.application
        return cls(
            id=application.id,
            company=application.company,
            position=application.position,
            website=application.website,
            application_type=application.application_type,
            created_by=application.created_by,
            created_at=application.created_at,
            updated_at=application.updated_at,
            current_status=item.current_status,
            status_history=[StatusEventResponse.from_entity(e) for e in item.status_history],
        )


class PaginatedApplicationsResponse(BaseModel):
    """Paginated envelope"""

    items: List[ApplicationResponse]
    total_items: int
    page: int
    page_size: int
    total_pages: int
