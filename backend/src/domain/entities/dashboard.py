"""
Dashboard Result Entities
Read-only analytics values returned by the aggregation engine
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional

from ..enums import StatusType


@dataclass(frozen=True)
class DashboardCounts:
    """Applications per latest status"""

    total: int = 0
    interviews: int = 0
    tests: int = 0
    offers_awarded: int = 0
    withdrawn: int = 0
    rejected: int = 0


@dataclass(frozen=True)
class SuccessRate:
    percentage: str
    message: str


@dataclass(frozen=True)
class StatusCount:
    status: StatusType
    count: int


@dataclass(frozen=True)
class DailyStatusCount:
    status: StatusType
    date: date
    count: int


@dataclass(frozen=True)
class ApplicationTrends:
    """Status distribution (bar) and per-day status series (line)"""

    bar_data: List[StatusCount] = field(default_factory=list)
    line_data: List[DailyStatusCount] = field(default_factory=list)


@dataclass(frozen=True)
class AverageResponseTime:
    average: str
    faster_message: str
    compared_to_message: str


@dataclass(frozen=True)
class RecentActivity:
    """
    One feed entry: either a newly created application
    (previous_status is None) or a status transition.
    """

    application_id: int
    company: str
    position: str
    current_status: StatusType
    last_updated: datetime
    previous_status: Optional[StatusType] = None


@dataclass(frozen=True)
class RecentActivities:
    activities: List[RecentActivity] = field(default_factory=list)
