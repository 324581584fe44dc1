"""
Tests for latest-status resolution
"""
import pytest

from core.exceptions import ConsistencyViolationException
from domain.entities import (
    Application,
    ApplicationStatusEvent,
    ApplicationWithHistory,
    latest_status,
    resolve_latest_event,
)
from domain.enums import InterviewType, StatusType, TestType
from infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from helpers import OWNER_ID, utc


def event(event_id, status_type, created_at, application_id=1, **kwargs):
    return ApplicationStatusEvent(
        id=event_id,
        application_id=application_id,
        status_type=status_type,
        created_by=OWNER_ID,
        created_at=created_at,
        **kwargs,
    )


class TestResolveLatestEvent:
    """Test the in-memory resolver"""

    def test_latest_timestamp_wins(self):
        events = [
            event(1, StatusType.APPLIED, utc(2024, 1, 1)),
            event(3, StatusType.REJECTED, utc(2024, 1, 2)),
            event(2, StatusType.INTERVIEW, utc(2024, 1, 5)),
        ]
        assert resolve_latest_event(events).id == 2
        assert latest_status(events) == StatusType.INTERVIEW

    def test_same_timestamp_goes_to_highest_id(self):
        """Ties on created_at resolve to the event inserted last"""
        same = utc(2024, 1, 3, 12)
        events = [
            event(1, StatusType.APPLIED, utc(2024, 1, 1)),
            event(5, StatusType.REJECTED, same),
            event(4, StatusType.INTERVIEW, same),
        ]
        assert latest_status(events) == StatusType.REJECTED

    def test_resolution_ignores_input_order(self):
        events = [
            event(2, StatusType.TEST, utc(2024, 1, 2)),
            event(1, StatusType.APPLIED, utc(2024, 1, 1)),
        ]
        assert latest_status(events) == latest_status(list(reversed(events)))

    def test_empty_history_is_a_consistency_violation(self):
        with pytest.raises(ConsistencyViolationException) as exc_info:
            resolve_latest_event([], application_id=42)
        assert exc_info.value.application_id == 42

    def test_current_status_property(self):
        application = Application(
            id=1,
            company="Acme",
            position="Engineer",
            created_by=OWNER_ID,
            created_at=utc(2024, 1, 1),
            updated_at=utc(2024, 1, 1),
        )
        item = ApplicationWithHistory(
            application=application,
            status_history=(
                event(1, StatusType.APPLIED, utc(2024, 1, 1)),
                event(2, StatusType.OFFER_AWARDED, utc(2024, 2, 1)),
            ),
        )
        assert item.current_status == StatusType.OFFER_AWARDED


class TestStatusEventValidation:
    """Test sub-type rules on status events"""

    def test_test_type_requires_test_status(self):
        with pytest.raises(ValueError):
            event(1, StatusType.INTERVIEW, utc(2024, 1, 1), test_type=TestType.TECHNICAL)

    def test_interview_type_requires_interview_status(self):
        with pytest.raises(ValueError):
            event(1, StatusType.TEST, utc(2024, 1, 1), interview_type=InterviewType.HR)

    def test_matching_sub_types_are_accepted(self):
        assert event(1, StatusType.TEST, utc(2024, 1, 1), test_type=TestType.ENGLISH).test_type == TestType.ENGLISH
        assert (
            event(2, StatusType.INTERVIEW, utc(2024, 1, 1), interview_type=InterviewType.BEHAVIOURAL).interview_type
            == InterviewType.BEHAVIOURAL
        )


class TestLatestStatusQuery:
    """Test the SQL resolver against the same tie-break rule"""

    @pytest.mark.asyncio
    async def test_latest_status_from_database(self, session, factory):
        app = await factory.application(
            created_at=utc(2024, 1, 1),
            statuses=[(StatusType.TEST, utc(2024, 1, 3)), (StatusType.INTERVIEW, utc(2024, 1, 8))],
        )
        repo = SQLAlchemyApplicationRepository(session)
        assert await repo.get_latest_status(app.id) == StatusType.INTERVIEW

    @pytest.mark.asyncio
    async def test_database_tie_break_matches_resolver(self, session, factory):
        """Two events with the same timestamp: the later insert wins"""
        same = utc(2024, 1, 4, 9)
        app = await factory.application(
            created_at=utc(2024, 1, 1),
            statuses=[(StatusType.INTERVIEW, same), (StatusType.REJECTED, same)],
        )
        repo = SQLAlchemyApplicationRepository(session)

        events = await repo.find_statuses_by_application_ids([app.id])
        assert await repo.get_latest_status(app.id) == latest_status(events) == StatusType.REJECTED

    @pytest.mark.asyncio
    async def test_missing_history_raises(self, session, factory):
        app = await factory.application(applied=False)
        repo = SQLAlchemyApplicationRepository(session)

        with pytest.raises(ConsistencyViolationException):
            await repo.get_latest_status(app.id)

    @pytest.mark.asyncio
    async def test_each_application_resolves_its_own_history(self, session, factory):
        """Events of other applications never leak into a single-application lookup"""
        offered = await factory.application(
            created_at=utc(2024, 1, 1),
            statuses=[(StatusType.OFFER_AWARDED, utc(2024, 2, 1))],
        )
        applied = await factory.application(created_at=utc(2024, 3, 1))
        repo = SQLAlchemyApplicationRepository(session)

        assert await repo.get_latest_status(offered.id) == StatusType.OFFER_AWARDED
        assert await repo.get_latest_status(applied.id) == StatusType.APPLIED
