"""
Application Tracking Service Interface
Creates applications, appends status events and lists them with history
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from domain.entities import ApplicationStatusEvent, ApplicationWithHistory
from domain.enums import ApplicationType, InterviewType, StatusType, TestType
from domain.value_objects import ApplicationFilter


T = TypeVar("T")


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """Paginated envelope"""

    items: List[T] = field(default_factory=list)
    total_items: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0


class IApplicationTrackingService(ABC):
    """Application tracking service interface"""

    @abstractmethod
    async def create_application(
        self,
        owner_id: int,
        company: str,
        position: str,
        website: Optional[str] = None,
        application_type: Optional[ApplicationType] = None,
    ) -> ApplicationWithHistory:
        """
        Create an application together with its initial Applied event

        Args:
            owner_id: Owning user ID
            company: Company name (non-empty)
            position: Position title (non-empty)
            website: Optional job posting URL
            application_type: Optional submission channel

        Returns:
            The new application with a one-event history
        """
        pass

    @abstractmethod
    async def add_status(
        self,
        actor_id: int,
        application_id: int,
        status_type: StatusType,
        test_type: Optional[TestType] = None,
        interview_type: Optional[InterviewType] = None,
        notes: Optional[str] = None,
    ) -> ApplicationStatusEvent:
        """
        Append a status event to an application owned by the actor

        Returns:
            The persisted event
        """
        pass

    @abstractmethod
    async def get_application(self, owner_id: int, application_id: int) -> ApplicationWithHistory:
        """Get one application with its full history"""
        pass

    @abstractmethod
    async def list_applications(
        self,
        owner_id: int,
        filters: ApplicationFilter,
    ) -> Paginated[ApplicationWithHistory]:
        """
        Get user's applications with optional filters

        Args:
            owner_id: User ID
            filters: search, status, date range, page and size

        Returns:
            Paginated applications, newest first, with derived current status
        """
        pass

    @abstractmethod
    async def delete_application(self, owner_id: int, application_id: int) -> None:
        """Soft-delete one application"""
        pass
