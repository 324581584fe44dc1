"""
Tests for dashboard analytics
"""
from datetime import date, timedelta

import pytest

from core.config import settings
from domain.enums import StatusType
from domain.value_objects import TrendWindow
from infrastructure.persistence.repositories.dashboard import SQLAlchemyDashboardRepository
from infrastructure.services.dashboard_service import (
    DashboardService,
    average_days,
    build_bar_data,
    build_line_data,
    compare_response_times,
    days_between,
    format_success_rate,
    month_bounds,
)
from helpers import OTHER_OWNER_ID, OWNER_ID, fixed_clock, utc


NOW = utc(2024, 6, 15, 12)


@pytest.fixture
def service(session):
    return DashboardService(SQLAlchemyDashboardRepository(session), clock=fixed_clock(NOW))


class TestFormatting:
    """Test the pure formatting helpers"""

    def test_success_rate_format(self):
        assert format_success_rate(0, 0) == "0.00%"
        assert format_success_rate(1, 3) == "33.33%"
        assert format_success_rate(2, 3) == "66.67%"
        assert format_success_rate(30, 30) == "100.00%"

    def test_days_between_is_inclusive(self):
        days = days_between(date(2024, 2, 27), date(2024, 3, 1))
        assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]
        assert days_between(date(2024, 3, 1), date(2024, 3, 1)) == [date(2024, 3, 1)]

    def test_bar_data_zero_filled_in_enum_order(self):
        bar = build_bar_data({StatusType.REJECTED: 2})
        assert [row.status for row in bar] == list(StatusType)
        assert [row.count for row in bar] == [0, 0, 0, 0, 2, 0]

    def test_line_data_is_dense_and_ordered(self):
        line = build_line_data(
            {(date(2024, 3, 2), StatusType.TEST): 4},
            date(2024, 3, 1),
            date(2024, 3, 3),
        )
        assert len(line) == 18
        assert [(p.date, p.status) for p in line[:7]] == [
            (date(2024, 3, 1), status) for status in StatusType
        ] + [(date(2024, 3, 2), StatusType.APPLIED)]
        assert [p.count for p in line if p.count] == [4]
        assert line[6].count == 0 and line[7].count == 4

    def test_average_days_floors_fractional_days(self):
        latencies = [
            (utc(2024, 6, 1), utc(2024, 6, 4)),
            (utc(2024, 6, 1), utc(2024, 6, 6, 12)),
        ]
        assert average_days(latencies) == 4
        assert average_days([(utc(2024, 6, 1), utc(2024, 6, 1, 23))]) == 0
        assert average_days([]) is None

    def test_compare_response_times(self):
        assert compare_response_times(4, 11) == ("7 days faster", "Compared to last month")
        assert compare_response_times(9, 2) == ("7 days slower", "Compared to last month")
        assert compare_response_times(3, 3) == ("Same as last month", "")
        assert compare_response_times(3, None) == ("N/A", "")
        assert compare_response_times(None, 3) == ("N/A", "")

    def test_month_bounds(self):
        assert month_bounds(utc(2024, 6, 15, 12)) == (utc(2024, 5, 1), utc(2024, 6, 1), utc(2024, 7, 1))
        assert month_bounds(utc(2024, 1, 31, 23)) == (utc(2023, 12, 1), utc(2024, 1, 1), utc(2024, 2, 1))
        assert month_bounds(utc(2024, 12, 1)) == (utc(2024, 11, 1), utc(2024, 12, 1), utc(2025, 1, 1))


class TestDashboardCounts:
    """Test per-status counts"""

    @pytest.mark.asyncio
    async def test_counts_use_latest_status(self, service, factory):
        await factory.application(company="Applied only")
        await factory.application(company="Interview", statuses=[(StatusType.INTERVIEW, utc(2024, 1, 3))])
        await factory.application(company="Test", statuses=[(StatusType.TEST, utc(2024, 1, 3))])
        await factory.application(company="Offer", statuses=[(StatusType.OFFER_AWARDED, utc(2024, 1, 3))])
        await factory.application(company="Rejected", statuses=[(StatusType.REJECTED, utc(2024, 1, 3))])
        await factory.application(
            company="Withdrawn",
            statuses=[(StatusType.INTERVIEW, utc(2024, 1, 3)), (StatusType.WITHDRAWN, utc(2024, 1, 4))],
        )
        await factory.application(
            company="Deleted", statuses=[(StatusType.INTERVIEW, utc(2024, 1, 3))], deleted=True
        )
        await factory.application(
            company="Someone else", owner_id=OTHER_OWNER_ID, statuses=[(StatusType.INTERVIEW, utc(2024, 1, 3))]
        )

        counts = await service.dashboard_counts(OWNER_ID)

        assert counts.total == 6
        assert counts.interviews == 1
        assert counts.tests == 1
        assert counts.offers_awarded == 1
        assert counts.rejected == 1
        assert counts.withdrawn == 1

    @pytest.mark.asyncio
    async def test_no_applications(self, service):
        counts = await service.dashboard_counts(OWNER_ID)
        assert (counts.total, counts.interviews, counts.tests) == (0, 0, 0)
        assert (counts.offers_awarded, counts.withdrawn, counts.rejected) == (0, 0, 0)


class TestSuccessRate:
    """Test the recent-applications success rate"""

    @pytest.mark.asyncio
    async def test_no_data(self, service):
        rate = await service.success_rate(OWNER_ID)
        assert rate.percentage == "0.00%"
        assert rate.message == "based on last 30 applications"

    @pytest.mark.asyncio
    async def test_progressed_statuses_count_as_success(self, service, factory):
        await factory.application(statuses=[(StatusType.OFFER_AWARDED, utc(2024, 1, 5))])
        await factory.application(statuses=[(StatusType.INTERVIEW, utc(2024, 1, 5))])
        await factory.application(statuses=[(StatusType.TEST, utc(2024, 1, 5)), (StatusType.REJECTED, utc(2024, 1, 6))])
        await factory.application()

        rate = await service.success_rate(OWNER_ID)

        assert rate.percentage == "50.00%"

    @pytest.mark.asyncio
    async def test_only_most_recent_applications_count(self, service, factory, monkeypatch):
        monkeypatch.setattr(settings, "SUCCESS_RATE_WINDOW", 2)
        await factory.application(statuses=[(StatusType.OFFER_AWARDED, utc(2024, 1, 5))])
        await factory.application(statuses=[(StatusType.TEST, utc(2024, 1, 5))])
        await factory.application()

        rate = await service.success_rate(OWNER_ID)

        assert rate.percentage == "50.00%"
        assert rate.message == "based on last 2 applications"


class TestTrends:
    """Test bar and line series"""

    @pytest.mark.asyncio
    async def test_empty_default_window(self, service):
        """Default window runs from the first of the month to now"""
        trends = await service.trends(OWNER_ID)

        assert [row.status for row in trends.bar_data] == list(StatusType)
        assert all(row.count == 0 for row in trends.bar_data)
        assert len(trends.line_data) == 15 * 6
        assert trends.line_data[0].date == date(2024, 6, 1)
        assert trends.line_data[-1].date == date(2024, 6, 15)
        assert all(point.count == 0 for point in trends.line_data)

    @pytest.mark.asyncio
    async def test_three_day_window(self, service, factory):
        await factory.application(created_at=utc(2024, 3, 1, 9))
        await factory.application(created_at=utc(2024, 3, 3, 8), statuses=[(StatusType.INTERVIEW, utc(2024, 3, 4))])
        await factory.application(created_at=utc(2024, 3, 3, 17))
        await factory.application(created_at=utc(2024, 2, 28, 12))
        await factory.application(created_at=utc(2024, 3, 2, 12), deleted=True)

        window = TrendWindow(date_from=utc(2024, 3, 1), date_to=utc(2024, 3, 3, 23, 59, 59))
        trends = await service.trends(OWNER_ID, window)

        bar = {row.status: row.count for row in trends.bar_data}
        assert bar[StatusType.APPLIED] == 2
        assert bar[StatusType.INTERVIEW] == 1
        assert sum(bar.values()) == 3

        assert len(trends.line_data) == 18
        line = {(p.date, p.status): p.count for p in trends.line_data}
        assert line[(date(2024, 3, 1), StatusType.APPLIED)] == 1
        assert line[(date(2024, 3, 2), StatusType.APPLIED)] == 0
        assert line[(date(2024, 3, 3), StatusType.APPLIED)] == 1
        assert line[(date(2024, 3, 3), StatusType.INTERVIEW)] == 1
        assert sum(line.values()) == 3
        assert [p.date for p in trends.line_data] == sorted(p.date for p in trends.line_data)

    @pytest.mark.asyncio
    async def test_window_edges_cover_whole_days(self, service, factory):
        """A mid-day start and a midnight end still count every application on those days"""
        await factory.application(created_at=utc(2024, 3, 1, 9))
        await factory.application(created_at=utc(2024, 3, 3, 10))
        await factory.application(created_at=utc(2024, 3, 4, 0, 0, 1))
        await factory.application(created_at=utc(2024, 2, 29, 23, 59, 59))

        window = TrendWindow(date_from=utc(2024, 3, 1, 12), date_to=utc(2024, 3, 3))
        trends = await service.trends(OWNER_ID, window)

        assert len(trends.line_data) == 18
        line = {(p.date, p.status): p.count for p in trends.line_data}
        assert line[(date(2024, 3, 1), StatusType.APPLIED)] == 1
        assert line[(date(2024, 3, 3), StatusType.APPLIED)] == 1
        assert sum(line.values()) == 2

        bar = {row.status: row.count for row in trends.bar_data}
        assert bar[StatusType.APPLIED] == 2

    @pytest.mark.asyncio
    async def test_same_day_window_with_later_start(self, service, factory):
        """Start and end on one day form a one-day window regardless of time of day"""
        await factory.application(created_at=utc(2024, 3, 2, 8))

        window = TrendWindow(date_from=utc(2024, 3, 2, 18), date_to=utc(2024, 3, 2, 6))
        trends = await service.trends(OWNER_ID, window)

        assert len(trends.line_data) == 6
        assert trends.line_data[0].count == 1

    @pytest.mark.asyncio
    async def test_inverted_window(self, service, factory):
        await factory.application(created_at=utc(2024, 3, 2))

        window = TrendWindow(date_from=utc(2024, 3, 5), date_to=utc(2024, 3, 1))
        trends = await service.trends(OWNER_ID, window)

        assert trends.line_data == []
        assert len(trends.bar_data) == 6
        assert all(row.count == 0 for row in trends.bar_data)


class TestAverageResponseTime:
    """Test month-over-month response latency"""

    @pytest.mark.asyncio
    async def test_no_responses(self, service, factory):
        await factory.application(created_at=utc(2024, 6, 1))

        result = await service.average_response_time(OWNER_ID)

        assert result.average == "N/A"
        assert result.faster_message == "N/A"
        assert result.compared_to_message == ""

    @pytest.mark.asyncio
    async def test_current_against_previous_month(self, service, factory):
        # June: 3 days and 5.5 days -> 4 days
        await factory.application(
            created_at=utc(2024, 5, 30),
            statuses=[(StatusType.TEST, utc(2024, 6, 2)), (StatusType.INTERVIEW, utc(2024, 6, 10))],
        )
        await factory.application(
            created_at=utc(2024, 6, 1),
            statuses=[(StatusType.INTERVIEW, utc(2024, 6, 6, 12))],
        )
        # May: 11 days
        await factory.application(
            created_at=utc(2024, 4, 20),
            statuses=[(StatusType.INTERVIEW, utc(2024, 5, 1))],
        )
        # Rejections are not responses
        await factory.application(
            created_at=utc(2024, 6, 1),
            statuses=[(StatusType.REJECTED, utc(2024, 6, 2))],
        )

        result = await service.average_response_time(OWNER_ID)

        assert result.average == "4 days"
        assert result.faster_message == "7 days faster"
        assert result.compared_to_message == "Compared to last month"

    @pytest.mark.asyncio
    async def test_only_current_month(self, service, factory):
        await factory.application(
            created_at=utc(2024, 6, 3),
            statuses=[(StatusType.TEST, utc(2024, 6, 3) + timedelta(days=2, hours=3))],
        )

        result = await service.average_response_time(OWNER_ID)

        assert result.average == "2 days"
        assert result.faster_message == "N/A"
        assert result.compared_to_message == ""


class TestRecentActivities:
    """Test the merged creation/transition feed"""

    @pytest.mark.asyncio
    async def test_feed_merges_creations_and_transitions(self, service, factory):
        first = await factory.application(
            company="Acme",
            created_at=utc(2024, 1, 1),
            statuses=[(StatusType.TEST, utc(2024, 1, 5)), (StatusType.INTERVIEW, utc(2024, 1, 10))],
        )
        second = await factory.application(company="Globex", created_at=utc(2024, 1, 7))
        await factory.application(company="Gone", created_at=utc(2024, 1, 12), deleted=True)

        feed = (await service.recent_activities(OWNER_ID)).activities

        assert [(a.application_id, a.last_updated) for a in feed] == [
            (first.id, utc(2024, 1, 10)),
            (second.id, utc(2024, 1, 7)),
            (first.id, utc(2024, 1, 5)),
            (first.id, utc(2024, 1, 1)),
        ]
        assert (feed[0].current_status, feed[0].previous_status) == (StatusType.INTERVIEW, StatusType.TEST)
        assert (feed[1].current_status, feed[1].previous_status) == (StatusType.APPLIED, None)
        assert (feed[2].current_status, feed[2].previous_status) == (StatusType.TEST, StatusType.APPLIED)
        # Creation entries carry the status the application started with
        assert (feed[3].current_status, feed[3].previous_status) == (StatusType.APPLIED, None)
        assert feed[3].company == "Acme"

    @pytest.mark.asyncio
    async def test_creation_entry_uses_earliest_event_with_id_tie_break(self, service, factory):
        same = utc(2024, 2, 1, 9)
        app = await factory.application(
            company="Initech",
            created_at=same,
            applied=False,
            statuses=[(StatusType.TEST, same), (StatusType.INTERVIEW, same), (StatusType.REJECTED, utc(2024, 2, 8))],
        )

        feed = (await service.recent_activities(OWNER_ID)).activities

        creation = [a for a in feed if a.previous_status is None]
        assert len(creation) == 1
        assert creation[0].application_id == app.id
        assert creation[0].current_status == StatusType.TEST
        assert feed[0].current_status == StatusType.REJECTED

    @pytest.mark.asyncio
    async def test_feed_is_truncated(self, service, factory, monkeypatch):
        monkeypatch.setattr(settings, "RECENT_ACTIVITY_LIMIT", 2)
        for day in range(1, 5):
            await factory.application(company=f"Company {day}", created_at=utc(2024, 1, day))

        feed = (await service.recent_activities(OWNER_ID)).activities

        assert [a.company for a in feed] == ["Company 4", "Company 3"]

    @pytest.mark.asyncio
    async def test_empty_feed(self, service):
        assert (await service.recent_activities(OWNER_ID)).activities == []
