"""
DashboardService Implementation
Turns the status event log into dashboard analytics
"""
import math
from datetime import date, datetime, timedelta
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from application.repositories.interfaces import IDashboardRepository
from application.services.dashboard import IDashboardService
from core.config import settings
from core.logging_config import logger
from domain.entities import (
    ApplicationTrends,
    AverageResponseTime,
    DailyStatusCount,
    DashboardCounts,
    RecentActivities,
    StatusCount,
    SuccessRate,
)
from domain.enums import StatusType
from domain.value_objects import TrendWindow, ensure_utc, utc_now


NOT_AVAILABLE = "N/A"
COMPARED_TO_LAST_MONTH = "Compared to last month"
SAME_AS_LAST_MONTH = "Same as last month"


def format_success_rate(successful: int, total: int) -> str:
    if total <= 0:
        return "0.00%"
    return f"{successful / total * 100:.2f}%"


def days_between(date_from: date, date_to: date) -> List[date]:
    """Every calendar day from date_from to date_to inclusive"""
    span = (date_to - date_from).days
    return [date_from + timedelta(days=offset) for offset in range(span + 1)]


def build_bar_data(counts: Dict[StatusType, int]) -> List[StatusCount]:
    """One row per status, zero when unobserved"""
    return [StatusCount(status=status, count=counts.get(status, 0)) for status in StatusType]


def build_line_data(
    counts: Dict[Tuple[date, StatusType], int],
    date_from: date,
    date_to: date,
) -> List[DailyStatusCount]:
    """Dense day x status grid ordered by day, then status"""
    return [
        DailyStatusCount(status=status, date=day, count=counts.get((day, status), 0))
        for day in days_between(date_from, date_to)
        for status in StatusType
    ]


def average_days(latencies: Sequence[Tuple[datetime, datetime]]) -> Optional[int]:
    """Mean (responded - applied) in days, floored; None without data"""
    if not latencies:
        return None
    seconds = sum((ensure_utc(responded) - ensure_utc(applied)).total_seconds() for applied, responded in latencies)
    return math.floor(seconds / len(latencies) / 86400)


def compare_response_times(current: Optional[int], previous: Optional[int]) -> Tuple[str, str]:
    """(faster_message, compared_to_message) for this month against last month"""
    if current is None or previous is None:
        return NOT_AVAILABLE, ""
    if current < previous:
        return f"{previous - current} days faster", COMPARED_TO_LAST_MONTH
    if current > previous:
        return f"{current - previous} days slower", COMPARED_TO_LAST_MONTH
    return SAME_AS_LAST_MONTH, ""


def month_bounds(now: datetime) -> Tuple[datetime, datetime, datetime]:
    """(previous month start, current month start, next month start)"""
    current_start = ensure_utc(now).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    previous_start = (current_start - timedelta(days=1)).replace(day=1)
    next_start = (current_start + timedelta(days=32)).replace(day=1)
    return previous_start, current_start, next_start


class DashboardService(IDashboardService):
    """Dashboard analytics service"""

    def __init__(
        self,
        dashboard_repository: IDashboardRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize dashboard service

        Args:
            dashboard_repository: Dashboard analytics repository
            clock: Source of "now" for default windows and month boundaries
        """
        self.dashboard_repo = dashboard_repository
        self.clock = clock

    async def dashboard_counts(self, owner_id: int) -> DashboardCounts:
        counts = await self.dashboard_repo.count_by_latest_status(owner_id)
        logger.info(f"Dashboard counts for user {owner_id}: {counts}")
        return counts

    async def success_rate(self, owner_id: int) -> SuccessRate:
        window = settings.SUCCESS_RATE_WINDOW
        successful, total = await self.dashboard_repo.count_recent_successes(owner_id, window)
        logger.info(f"Success rate for user {owner_id}: {successful}/{total}")
        return SuccessRate(
            percentage=format_success_rate(successful, total),
            message=f"based on last {window} applications",
        )

    async def trends(self, owner_id: int, window: Optional[TrendWindow] = None) -> ApplicationTrends:
        date_from, date_to = (window or TrendWindow()).resolve(self.clock())
        if date_from.date() > date_to.date():
            logger.warning(f"Empty trend window for user {owner_id}: {date_from} > {date_to}")
            return ApplicationTrends(bar_data=build_bar_data({}), line_data=[])

        bar_counts = await self.dashboard_repo.count_by_status_in_window(owner_id, date_from, date_to)
        daily_counts = await self.dashboard_repo.count_by_day_and_status(owner_id, date_from, date_to)

        return ApplicationTrends(
            bar_data=build_bar_data(bar_counts),
            line_data=build_line_data(daily_counts, date_from.date(), date_to.date()),
        )

    async def average_response_time(self, owner_id: int) -> AverageResponseTime:
        previous_start, current_start, next_start = month_bounds(self.clock())

        current = average_days(
            await self.dashboard_repo.find_response_latencies(owner_id, current_start, next_start)
        )
        previous = average_days(
            await self.dashboard_repo.find_response_latencies(owner_id, previous_start, current_start)
        )
        logger.info(f"Average response days for user {owner_id}: current={current}, previous={previous}")

        faster_message, compared_to_message = compare_response_times(current, previous)
        return AverageResponseTime(
            average=f"{current} days" if current is not None else NOT_AVAILABLE,
            faster_message=faster_message,
            compared_to_message=compared_to_message,
        )

    async def recent_activities(self, owner_id: int) -> RecentActivities:
        activities = await self.dashboard_repo.find_recent_activities(owner_id, settings.RECENT_ACTIVITY_LIMIT)
        return RecentActivities(activities=activities)
