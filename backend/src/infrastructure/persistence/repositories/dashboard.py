"""
Dashboard Repository Implementation
Read-only analytics queries over applications and their latest statuses
"""
from datetime import date, datetime, time, timedelta, timezone
from typing import Dict, List, Tuple

from sqlalchemy import String, and_, case, cast, false, func, null, select, union_all
from sqlalchemy.ext.asyncio import AsyncSession

from application.repositories.interfaces import IDashboardRepository
from core.logging_config import logger
from domain.entities import DashboardCounts, RecentActivity
from domain.enums import RESPONSE_STATUSES, SUCCESSFUL_STATUSES, StatusType
from domain.value_objects import ensure_utc
from infrastructure.persistence.models import ApplicationModel, ApplicationStatusModel
from infrastructure.persistence.queries import (
    data_access,
    first_status_subquery,
    latest_status_subquery,
    owned_application_ids,
)


def _day_window(date_from: datetime, date_to: datetime) -> Tuple[datetime, datetime]:
    """Whole UTC days covering [date_from, date_to]: first day start, day after last day start"""
    start = datetime.combine(ensure_utc(date_from).date(), time.min, tzinfo=timezone.utc)
    end = datetime.combine(ensure_utc(date_to).date() + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return start, end


def _as_date(value) -> date:
    """Day keys come back as date (PostgreSQL) or ISO text (SQLite)"""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


class SQLAlchemyDashboardRepository(IDashboardRepository):
    """Dashboard analytics repository using SQLAlchemy"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _owned(self, owner_id: int):
        return and_(
            ApplicationModel.created_by == owner_id,
            ApplicationModel.deleted == false(),
        )

    async def count_by_latest_status(self, owner_id: int) -> DashboardCounts:
        """Total applications plus one count per latest-status bucket"""
        latest = latest_status_subquery(owner_id)

        def bucket(status: StatusType):
            return func.count(case((latest.c.status_type == status.value, 1)))

        query = (
            select(
                func.count(ApplicationModel.id).label("total"),
                bucket(StatusType.INTERVIEW).label("interviews"),
                bucket(StatusType.TEST).label("tests"),
                bucket(StatusType.OFFER_AWARDED).label("offers_awarded"),
                bucket(StatusType.WITHDRAWN).label("withdrawn"),
                bucket(StatusType.REJECTED).label("rejected"),
            )
            .select_from(ApplicationModel)
            .outerjoin(latest, latest.c.application_id == ApplicationModel.id)
            .where(self._owned(owner_id))
        )

        with data_access("compute dashboard counts"):
            result = await self.session.execute(query)
            row = result.one()

        return DashboardCounts(
            total=row.total or 0,
            interviews=row.interviews or 0,
            tests=row.tests or 0,
            offers_awarded=row.offers_awarded or 0,
            withdrawn=row.withdrawn or 0,
            rejected=row.rejected or 0,
        )

    async def count_recent_successes(self, owner_id: int, window: int) -> Tuple[int, int]:
        """
        (successful, total) over the owner's most recent applications.

        Recency is approximated by descending application id.
        """
        latest = latest_status_subquery(owner_id)
        recent = (
            select(ApplicationModel.id)
            .where(self._owned(owner_id))
            .order_by(ApplicationModel.id.desc())
            .limit(window)
            .subquery("recent_applications")
        )
        successful = [status.value for status in SUCCESSFUL_STATUSES]

        query = (
            select(
                func.count(case((latest.c.status_type.in_(successful), 1))).label("successful"),
                func.count(recent.c.id).label("total"),
            )
            .select_from(recent)
            .outerjoin(latest, latest.c.application_id == recent.c.id)
        )

        with data_access("compute success rate"):
            result = await self.session.execute(query)
            row = result.one()

        return int(row.successful or 0), int(row.total or 0)

    async def count_by_status_in_window(
        self,
        owner_id: int,
        date_from: datetime,
        date_to: datetime,
    ) -> Dict[StatusType, int]:
        """Latest-status distribution of applications created on the window's days"""
        day_start, day_end = _day_window(date_from, date_to)
        latest = latest_status_subquery(owner_id)
        query = (
            select(latest.c.status_type, func.count(ApplicationModel.id).label("applications"))
            .select_from(ApplicationModel)
            .join(latest, latest.c.application_id == ApplicationModel.id)
            .where(
                self._owned(owner_id),
                ApplicationModel.created_at >= day_start,
                ApplicationModel.created_at < day_end,
            )
            .group_by(latest.c.status_type)
        )

        with data_access("compute status distribution"):
            result = await self.session.execute(query)
            rows = result.all()

        return {StatusType(row.status_type): int(row.applications) for row in rows}

    async def count_by_day_and_status(
        self,
        owner_id: int,
        date_from: datetime,
        date_to: datetime,
    ) -> Dict[Tuple[date, StatusType], int]:
        """
        Counts keyed by (creation day, latest status) inside the window.

        Only observed pairs are returned; the caller fills the gaps.
        """
        day_start, day_end = _day_window(date_from, date_to)
        latest = latest_status_subquery(owner_id)
        day = func.date(ApplicationModel.created_at).label("day")
        query = (
            select(day, latest.c.status_type, func.count(ApplicationModel.id).label("applications"))
            .select_from(ApplicationModel)
            .join(latest, latest.c.application_id == ApplicationModel.id)
            .where(
                self._owned(owner_id),
                ApplicationModel.created_at >= day_start,
                ApplicationModel.created_at < day_end,
            )
            .group_by(day, latest.c.status_type)
        )

        with data_access("compute daily status series"):
            result = await self.session.execute(query)
            rows = result.all()

        logger.debug(f"Daily series for user {owner_id}: {len(rows)} populated (day, status) pairs")
        return {(_as_date(row.day), StatusType(row.status_type)): int(row.applications) for row in rows}

    async def find_response_latencies(
        self,
        owner_id: int,
        responded_from: datetime,
        responded_before: datetime,
    ) -> List[Tuple[datetime, datetime]]:
        """
        (applied_at, responded_at) pairs whose first response falls in the window.

        applied_at is the earliest Applied event; responded_at is the earliest
        Test or Interview event strictly after it.
        """
        applied = (
            select(
                ApplicationStatusModel.application_id,
                func.min(ApplicationStatusModel.created_at).label("applied_at"),
            )
            .where(
                ApplicationStatusModel.status_type == StatusType.APPLIED.value,
                ApplicationStatusModel.application_id.in_(owned_application_ids(owner_id)),
            )
            .group_by(ApplicationStatusModel.application_id)
            .subquery("applied_times")
        )
        responded = (
            select(
                ApplicationStatusModel.application_id,
                func.min(ApplicationStatusModel.created_at).label("responded_at"),
            )
            .select_from(ApplicationStatusModel)
            .join(applied, applied.c.application_id == ApplicationStatusModel.application_id)
            .where(
                ApplicationStatusModel.status_type.in_([status.value for status in RESPONSE_STATUSES]),
                ApplicationStatusModel.created_at > applied.c.applied_at,
            )
            .group_by(ApplicationStatusModel.application_id)
            .subquery("response_times")
        )
        query = (
            select(applied.c.applied_at, responded.c.responded_at)
            .select_from(applied)
            .join(responded, responded.c.application_id == applied.c.application_id)
            .where(
                responded.c.responded_at >= ensure_utc(responded_from),
                responded.c.responded_at < ensure_utc(responded_before),
            )
        )

        with data_access("compute response latencies"):
            result = await self.session.execute(query)
            rows = result.all()

        return [(ensure_utc(row.applied_at), ensure_utc(row.responded_at)) for row in rows]

    async def find_recent_activities(self, owner_id: int, limit: int) -> List[RecentActivity]:
        """
        Newest application creations and status transitions, merged.

        A creation entry carries the status the application started with.
        A transition is any event with a preceding event on the same
        application, so the initial Applied event never appears as one.
        """
        first = first_status_subquery(owner_id)
        created = (
            select(
                ApplicationModel.id.label("application_id"),
                ApplicationModel.company,
                ApplicationModel.position,
                first.c.status_type.label("current_status"),
                cast(null(), String(30)).label("previous_status"),
                ApplicationModel.created_at.label("last_updated"),
            )
            .select_from(ApplicationModel)
            .join(first, first.c.application_id == ApplicationModel.id)
            .where(self._owned(owner_id))
            .order_by(ApplicationModel.created_at.desc())
            .limit(limit)
            .subquery("recent_applications")
        )

        history = (
            select(
                ApplicationStatusModel.application_id,
                ApplicationStatusModel.status_type,
                func.lag(ApplicationStatusModel.status_type).over(
                    partition_by=ApplicationStatusModel.application_id,
                    order_by=(ApplicationStatusModel.created_at.asc(), ApplicationStatusModel.id.asc()),
                ).label("previous_status"),
                ApplicationStatusModel.created_at,
            )
            .where(ApplicationStatusModel.application_id.in_(owned_application_ids(owner_id)))
            .subquery("status_history")
        )
        transitions = (
            select(
                ApplicationModel.id.label("application_id"),
                ApplicationModel.company,
                ApplicationModel.position,
                history.c.status_type.label("current_status"),
                history.c.previous_status,
                history.c.created_at.label("last_updated"),
            )
            .select_from(ApplicationModel)
            .join(history, history.c.application_id == ApplicationModel.id)
            .where(history.c.previous_status.is_not(None))
            .order_by(history.c.created_at.desc())
            .limit(limit)
            .subquery("recent_transitions")
        )

        feed = union_all(select(created), select(transitions)).subquery("activity_feed")
        query = select(feed).order_by(feed.c.last_updated.desc()).limit(limit)

        with data_access("fetch recent activities"):
            result = await self.session.execute(query)
            rows = result.all()

        return [
            RecentActivity(
                application_id=row.application_id,
                company=row.company,
                position=row.position,
                current_status=StatusType(row.current_status),
                previous_status=StatusType(row.previous_status) if row.previous_status else None,
                last_updated=ensure_utc(row.last_updated),
            )
            for row in rows
        ]
