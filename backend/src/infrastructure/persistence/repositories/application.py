"""
Application Repository Implementation
SQLAlchemy async repository for applications and their status history
"""
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from sqlalchemy import false, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from application.repositories.interfaces import IApplicationRepository
from core.exceptions import ConsistencyViolationException
from core.logging_config import logger
from domain.entities import Application, ApplicationStatusEvent
from domain.enums import ApplicationType, InterviewType, StatusType, TestType
from domain.value_objects import ApplicationFilter, ensure_utc
from infrastructure.persistence.models import ApplicationModel, ApplicationStatusModel
from infrastructure.persistence.queries import (
    build_application_predicates,
    count_query,
    data_access,
    latest_status_subquery,
    page_query,
)


class SQLAlchemyApplicationRepository(IApplicationRepository):
    """Application repository using SQLAlchemy"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, application: Application) -> Application:
        """Insert a new application"""
        model = self._to_model(application)
        with data_access("save application"):
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
        return self._to_entity(model)

    async def save_status(self, event: ApplicationStatusEvent) -> ApplicationStatusEvent:
        """Append a status event; events are never updated afterwards"""
        model = self._status_to_model(event)
        with data_access("save application status"):
            self.session.add(model)
            await self.session.flush()
            await self.session.refresh(model)
        return self._status_to_entity(model)

    async def get_by_id(self, application_id: int, owner_id: Optional[int] = None) -> Optional[Application]:
        """Get a live (not soft-deleted) application, optionally scoped to its owner"""
        query = select(ApplicationModel).where(
            ApplicationModel.id == application_id,
            ApplicationModel.deleted == false(),
        )
        if owner_id is not None:
            query = query.where(ApplicationModel.created_by == owner_id)

        with data_access("get application"):
            result = await self.session.execute(query)
            model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def soft_delete(self, application_id: int, owner_id: int) -> bool:
        """Flag an application as deleted; its history is left untouched"""
        now = datetime.now(timezone.utc)
        stmt = (
            update(ApplicationModel)
            .where(
                ApplicationModel.id == application_id,
                ApplicationModel.created_by == owner_id,
                ApplicationModel.deleted == false(),
            )
            .values(deleted=True, deleted_at=now, updated_at=now)
        )
        with data_access("delete application"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def count_with_filters(self, owner_id: int, filters: ApplicationFilter) -> int:
        """Number of applications matching the listing filter"""
        predicates = build_application_predicates(owner_id, filters)
        with data_access("count applications"):
            result = await self.session.execute(count_query(predicates))
        return int(result.scalar_one())

    async def fetch_with_filters(
        self,
        owner_id: int,
        filters: ApplicationFilter,
        limit: int,
        offset: int,
    ) -> List[Application]:
        """Page of applications matching the listing filter, newest first"""
        predicates = build_application_predicates(owner_id, filters)
        with data_access("fetch applications"):
            result = await self.session.execute(page_query(predicates, limit, offset))
            models = result.scalars().all()
        return [self._to_entity(m) for m in models]

    async def find_statuses_by_application_ids(
        self,
        application_ids: Sequence[int],
    ) -> List[ApplicationStatusEvent]:
        """Histories of several applications in one query, oldest event first"""
        if not application_ids:
            return []

        query = (
            select(ApplicationStatusModel)
            .where(ApplicationStatusModel.application_id.in_(list(application_ids)))
            .order_by(ApplicationStatusModel.created_at.asc(), ApplicationStatusModel.id.asc())
        )
        with data_access("fetch application statuses"):
            result = await self.session.execute(query)
            models = result.scalars().all()

        logger.debug(f"Fetched {len(models)} status events for {len(application_ids)} applications")
        return [self._status_to_entity(m) for m in models]

    async def get_latest_status(self, application_id: int) -> StatusType:
        """Current status of one application"""
        latest = latest_status_subquery(application_id=application_id)
        query = select(latest.c.status_type)
        with data_access("resolve latest status"):
            result = await self.session.execute(query)
            status = result.scalar_one_or_none()

        if status is None:
            raise ConsistencyViolationException(application_id)
        return StatusType(status)

    def _to_model(self, entity: Application) -> ApplicationModel:
        return ApplicationModel(
            id=entity.id,
            company=entity.company.strip(),
            position=entity.position.strip(),
            website=entity.website,
            application_type=entity.application_type.value if entity.application_type else None,
            created_by=entity.created_by,
            created_at=ensure_utc(entity.created_at),
            updated_at=ensure_utc(entity.updated_at),
            deleted=entity.deleted,
            deleted_at=entity.deleted_at,
        )

    def _to_entity(self, model: ApplicationModel) -> Application:
        return Application(
            id=model.id,
            company=model.company,
            position=model.position,
            website=model.website,
            application_type=ApplicationType(model.application_type) if model.application_type else None,
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
            deleted=model.deleted,
            deleted_at=ensure_utc(model.deleted_at) if model.deleted_at else None,
        )

    def _status_to_model(self, entity: ApplicationStatusEvent) -> ApplicationStatusModel:
        return ApplicationStatusModel(
            id=entity.id,
            application_id=entity.application_id,
            status_type=entity.status_type.value,
            test_type=entity.test_type.value if entity.test_type else None,
            interview_type=entity.interview_type.value if entity.interview_type else None,
            notes=entity.notes,
            created_by=entity.created_by,
            created_at=ensure_utc(entity.created_at),
        )

    def _status_to_entity(self, model: ApplicationStatusModel) -> ApplicationStatusEvent:
        return ApplicationStatusEvent(
            id=model.id,
            application_id=model.application_id,
            status_type=StatusType(model.status_type),
            test_type=TestType(model.test_type) if model.test_type else None,
            interview_type=InterviewType(model.interview_type) if model.interview_type else None,
            notes=model.notes,
            created_by=model.created_by,
            created_at=ensure_utc(model.created_at),
        )
