"""
Test helpers: fixed timestamps and record factories
"""
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from domain.enums import StatusType
from infrastructure.persistence.models import ApplicationModel, ApplicationStatusModel


OWNER_ID = 1
OTHER_OWNER_ID = 2


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, second, tzinfo=timezone.utc)


def fixed_clock(now: datetime):
    return lambda: now


class RecordFactory:
    """Inserts applications and status events with explicit timestamps"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def application(
        self,
        company: str = "Acme",
        position: str = "Engineer",
        created_at: Optional[datetime] = None,
        owner_id: int = OWNER_ID,
        website: Optional[str] = None,
        statuses: Iterable[Tuple[StatusType, datetime]] = (),
        applied: bool = True,
        deleted: bool = False,
    ) -> ApplicationModel:
        """
        Create an application; unless applied=False its history starts with
        an Applied event at created_at, followed by the given statuses.
        """
        created_at = created_at or utc(2024, 1, 1)
        model = ApplicationModel(
            company=company,
            position=position,
            website=website,
            created_by=owner_id,
            created_at=created_at,
            updated_at=created_at,
            deleted=deleted,
            deleted_at=created_at if deleted else None,
        )
        self.session.add(model)
        await self.session.flush()

        if applied:
            await self.status(model.id, StatusType.APPLIED, created_at, owner_id)
        for status_type, at in statuses:
            await self.status(model.id, status_type, at, owner_id)
        return model

    async def status(
        self,
        application_id: int,
        status_type: StatusType,
        created_at: datetime,
        owner_id: int = OWNER_ID,
    ) -> ApplicationStatusModel:
        model = ApplicationStatusModel(
            application_id=application_id,
            status_type=status_type.value,
            created_by=owner_id,
            created_at=created_at,
        )
        self.session.add(model)
        await self.session.flush()
        return model
