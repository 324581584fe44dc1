"""
Dependency Injection Container
Manages service and repository instances
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_db
from application.repositories.interfaces import IApplicationRepository, IDashboardRepository
from application.services.application_tracking import IApplicationTrackingService
from application.services.auth.interfaces import IJwtService
from application.services.dashboard import IDashboardService
from infrastructure.persistence.repositories.application import SQLAlchemyApplicationRepository
from infrastructure.persistence.repositories.dashboard import SQLAlchemyDashboardRepository
from infrastructure.security.jwt_service import JwtService
from infrastructure.services.application_tracking_service import ApplicationTrackingService
from infrastructure.services.dashboard_service import DashboardService


# Singleton instances
_jwt_service: IJwtService | None = None


def get_jwt_service() -> IJwtService:
    """Get JWT service instance (singleton)"""
    global _jwt_service
    if _jwt_service is None:
        _jwt_service = JwtService()
    return _jwt_service


def get_application_repository(
    session: AsyncSession = Depends(get_db)
) -> IApplicationRepository:
    """Get application repository instance (per-request)"""
    return SQLAlchemyApplicationRepository(session)


def get_dashboard_repository(
    session: AsyncSession = Depends(get_db)
) -> IDashboardRepository:
    """Get dashboard repository instance (per-request)"""
    return SQLAlchemyDashboardRepository(session)


def get_application_tracking_service(
    application_repo: IApplicationRepository = Depends(get_application_repository)
) -> IApplicationTrackingService:
    """Get application tracking service instance (per-request)"""
    return ApplicationTrackingService(application_repo)


def get_dashboard_service(
    dashboard_repo: IDashboardRepository = Depends(get_dashboard_repository)
) -> IDashboardService:
    """Get dashboard service instance (per-request)"""
    return DashboardService(dashboard_repo)
