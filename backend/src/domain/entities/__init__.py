"""Domain Entities - Core business objects"""

from .application import (
    Application,
    ApplicationStatusEvent,
    ApplicationWithHistory,
    latest_status,
    resolve_latest_event,
)
from .dashboard import (
    ApplicationTrends,
    AverageResponseTime,
    DailyStatusCount,
    DashboardCounts,
    RecentActivities,
    RecentActivity,
    StatusCount,
    SuccessRate,
)
__all__ = [
    "Application",
    "ApplicationStatusEvent",
    "ApplicationWithHistory",
    "latest_status",
    "resolve_latest_event",
    "ApplicationTrends",
    "AverageResponseTime",
    "DailyStatusCount",
    "DashboardCounts",
    "RecentActivities",
    "RecentActivity",
    "StatusCount",
    "SuccessRate",
]
