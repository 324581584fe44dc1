"""
Dashboard Service Interface
Read-only analytics over a user's applications
"""
from abc import ABC, abstractmethod
from typing import Optional

from domain.entities import (
    ApplicationTrends,
    AverageResponseTime,
    DashboardCounts,
    RecentActivities,
    SuccessRate,
)
from domain.value_objects import TrendWindow


class IDashboardService(ABC):
    """Dashboard service interface"""

    @abstractmethod
    async def dashboard_counts(self, owner_id: int) -> DashboardCounts:
        """Applications per current status plus total"""
        pass

    @abstractmethod
    async def success_rate(self, owner_id: int) -> SuccessRate:
        """Share of recent applications that progressed"""
        pass

    @abstractmethod
    async def trends(self, owner_id: int, window: Optional[TrendWindow] = None) -> ApplicationTrends:
        """Status distribution and daily status series"""
        pass

    @abstractmethod
    async def average_response_time(self, owner_id: int) -> AverageResponseTime:
        """This month's employer response latency against last month's"""
        pass

    @abstractmethod
    async def recent_activities(self, owner_id: int) -> RecentActivities:
        """Latest creations and status transitions"""
        pass
