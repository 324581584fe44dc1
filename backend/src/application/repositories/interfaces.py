"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence, Tuple

from domain.entities import Application, ApplicationStatusEvent, DashboardCounts, RecentActivity
from domain.enums import StatusType
from domain.value_objects import ApplicationFilter


class IApplicationRepository(ABC):
    """Application and status history repository interface"""

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """Insert new application"""
        pass

    @abstractmethod
    async def save_status(self, event: ApplicationStatusEvent) -> ApplicationStatusEvent:
        """Append status event"""
        pass

    @abstractmethod
    async def get_by_id(self, application_id: int, owner_id: Optional[int] = None) -> Optional[Application]:
        """Get live application by ID"""
        pass

    @abstractmethod
    async def soft_delete(self, application_id: int, owner_id: int) -> bool:
        """Soft-delete application"""
        pass

    @abstractmethod
    async def count_with_filters(self, owner_id: int, filters: ApplicationFilter) -> int:
        """Count applications matching filter"""
        pass

    @abstractmethod
    async def fetch_with_filters(
        self,
        owner_id: int,
        filters: ApplicationFilter,
        limit: int,
        offset: int,
    ) -> List[Application]:
        """Fetch one page of applications matching filter"""
        pass

    @abstractmethod
    async def find_statuses_by_application_ids(
        self,
        application_ids: Sequence[int],
    ) -> List[ApplicationStatusEvent]:
        """Get status events for applications, oldest first"""
        pass

    @abstractmethod
    async def get_latest_status(self, application_id: int) -> StatusType:
        """Get current status of application"""
        pass


class IDashboardRepository(ABC):
    """Dashboard analytics repository interface"""

    @abstractmethod
    async def count_by_latest_status(self, owner_id: int) -> DashboardCounts:
        """Count applications per latest status"""
        pass

    @abstractmethod
    async def count_recent_successes(self, owner_id: int, window: int) -> Tuple[int, int]:
        """(successful, total) over the most recent applications"""
        pass

    @abstractmethod
    async def count_by_status_in_window(
        self,
        owner_id: int,
        date_from: datetime,
        date_to: datetime,
    ) -> Dict[StatusType, int]:
        """Latest-status distribution of applications created in window"""
        pass

    @abstractmethod
    async def count_by_day_and_status(
        self,
        owner_id: int,
        date_from: datetime,
        date_to: datetime,
    ) -> Dict[Tuple[date, StatusType], int]:
        """Counts per (creation day, latest status) in window"""
        pass

    @abstractmethod
    async def find_response_latencies(
        self,
        owner_id: int,
        responded_from: datetime,
        responded_before: datetime,
    ) -> List[Tuple[datetime, datetime]]:
        """(applied_at, responded_at) pairs with response in window"""
        pass

    @abstractmethod
    async def find_recent_activities(self, owner_id: int, limit: int) -> List[RecentActivity]:
        """Most recent creations and status transitions"""
        pass
