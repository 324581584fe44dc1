"""
ApplicationTrackingService Implementation
Creates, lists and filters user job applications
"""
from collections import defaultdict
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from application.repositories.interfaces import IApplicationRepository
from application.services.application_tracking import IApplicationTrackingService, Paginated
from core.config import settings
from core.exceptions import (
    ConsistencyViolationException,
    ResourceNotFoundException,
    ValidationException,
)
from core.logging_config import logger
from domain.entities import Application, ApplicationStatusEvent, ApplicationWithHistory
from domain.enums import ApplicationType, InterviewType, StatusType, TestType
from domain.value_objects import ApplicationFilter, compute_pagination, utc_now


def assemble_listing(
    applications: Sequence[Application],
    events: Sequence[ApplicationStatusEvent],
) -> Tuple[List[ApplicationWithHistory], List[int]]:
    """
    Attach each application's history, keeping the page order.

    Events must arrive oldest first; that order is kept inside each bucket.
    Applications without any event are left out and their ids returned
    as consistency violations.
    """
    buckets: Dict[int, List[ApplicationStatusEvent]] = defaultdict(list)
    for event in events:
        buckets[event.application_id].append(event)

    items: List[ApplicationWithHistory] = []
    violations: List[int] = []
    for application in applications:
        history = buckets.get(application.id)
        if not history:
            logger.error(f"Consistency violation: application {application.id} has no status history, skipping")
            violations.append(application.id)
            continue
        items.append(ApplicationWithHistory(application=application, status_history=tuple(history)))

    return items, violations


class ApplicationTrackingService(IApplicationTrackingService):
    """Application tracking service for creating and querying user applications"""

    def __init__(
        self,
        application_repository: IApplicationRepository,
        clock: Callable[[], datetime] = utc_now,
        default_page_size: Optional[int] = None,
    ):
        """
        Initialize application tracking service

        Args:
            application_repository: Application repository
            clock: Source of "now" for new records
            default_page_size: Page size when the caller gives none
        """
        self.application_repo = application_repository
        self.clock = clock
        self.default_page_size = default_page_size or settings.DEFAULT_PAGE_SIZE

    async def create_application(
        self,
        owner_id: int,
        company: str,
        position: str,
        website: Optional[str] = None,
        application_type: Optional[ApplicationType] = None,
    ) -> ApplicationWithHistory:
        now = self.clock()
        try:
            application = Application(
                id=None,
                company=company,
                position=position,
                website=website,
                application_type=application_type,
                created_by=owner_id,
                created_at=now,
                updated_at=now,
            )
        except ValueError as e:
            raise ValidationException("application", str(e))

        # Both inserts share the request transaction
        saved = await self.application_repo.save(application)
        applied = await self.application_repo.save_status(
            ApplicationStatusEvent(
                id=None,
                application_id=saved.id,
                status_type=StatusType.APPLIED,
                created_by=owner_id,
                created_at=now,
            )
        )

        logger.info(f"Created application {saved.id} for user {owner_id}: {saved.company} - {saved.position}")
        return ApplicationWithHistory(application=saved, status_history=(applied,))

    async def add_status(
        self,
        actor_id: int,
        application_id: int,
        status_type: StatusType,
        test_type: Optional[TestType] = None,
        interview_type: Optional[InterviewType] = None,
        notes: Optional[str] = None,
    ) -> ApplicationStatusEvent:
        application = await self.application_repo.get_by_id(application_id, owner_id=actor_id)
        if application is None:
            raise ResourceNotFoundException("Application", str(application_id))

        try:
            event = ApplicationStatusEvent(
                id=None,
                application_id=application_id,
                status_type=status_type,
                test_type=test_type,
                interview_type=interview_type,
                notes=notes,
                created_by=actor_id,
                created_at=self.clock(),
            )
        except ValueError as e:
            raise ValidationException("status_type", str(e))

        saved = await self.application_repo.save_status(event)
        logger.info(f"Application {application_id} moved to {status_type.value} by user {actor_id}")
        return saved

    async def get_application(self, owner_id: int, application_id: int) -> ApplicationWithHistory:
        application = await self.application_repo.get_by_id(application_id, owner_id=owner_id)
        if application is None:
            raise ResourceNotFoundException("Application", str(application_id))

        events = await self.application_repo.find_statuses_by_application_ids([application_id])
        items, violations = assemble_listing([application], events)
        if violations:
            # A single record cannot be skipped; surface it
            raise ConsistencyViolationException(application_id)
        return items[0]

    async def list_applications(
        self,
        owner_id: int,
        filters: ApplicationFilter,
    ) -> Paginated[ApplicationWithHistory]:
        logger.info(f"Listing applications for user {owner_id}, filters: {filters}")

        total = await self.application_repo.count_with_filters(owner_id, filters)
        pagination = compute_pagination(filters.page, filters.size, total, default_size=self.default_page_size)

        applications: List[Application] = []
        if pagination.offset < total:
            applications = await self.application_repo.fetch_with_filters(
                owner_id, filters, limit=pagination.size, offset=pagination.offset
            )

        events = await self.application_repo.find_statuses_by_application_ids([a.id for a in applications])
        items, violations = assemble_listing(applications, events)
        if violations:
            logger.warning(f"Skipped {len(violations)} application(s) without history for user {owner_id}: {violations}")

        logger.info(f"Found {total} applications for user {owner_id}, returning page {pagination.page} ({len(items)} items)")
        return Paginated(
            items=items,
            total_items=total,
            page=pagination.page,
            page_size=pagination.size,
            total_pages=pagination.total_pages,
        )

    async def delete_application(self, owner_id: int, application_id: int) -> None:
        deleted = await self.application_repo.soft_delete(application_id, owner_id)
        if not deleted:
            raise ResourceNotFoundException("Application", str(application_id))
        logger.info(f"Soft-deleted application {application_id} for user {owner_id}")
