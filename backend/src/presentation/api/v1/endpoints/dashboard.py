"""
Dashboard Endpoints
Read-only analytics over the user's applications
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query

from application.services.dashboard import IDashboardService
from domain.value_objects import TrendWindow
from presentation.api.v1.container import get_dashboard_service
from presentation.api.v1.dependencies import get_current_user_id
from presentation.api.v1.schemas.dashboard import (
    AverageResponseTimeResponse,
    DashboardCountsResponse,
    RecentActivitiesResponse,
    SuccessRateResponse,
    TrendsResponse,
)


router = APIRouter(prefix="/dashboard")


@router.get("/stats", response_model=DashboardCountsResponse)
async def dashboard_stats(
    user_id: int = Depends(get_current_user_id),
    service: IDashboardService = Depends(get_dashboard_service)
):
    """Applications per current status plus the total."""
    return DashboardCountsResponse.from_entity(await service.dashboard_counts(user_id))


@router.get("/success-rate", response_model=SuccessRateResponse)
async def success_rate(
    user_id: int = Depends(get_current_user_id),
    service: IDashboardService = Depends(get_dashboard_service)
):
    return SuccessRateResponse.from_entity(await service.success_rate(user_id))


@router.get("/trends", response_model=TrendsResponse)
async def trends(
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    user_id: int = Depends(get_current_user_id),
    service: IDashboardService = Depends(get_dashboard_service)
):
    """
    Status distribution and daily status series.

    The window defaults to the start of the current month until now.
    """
    window = TrendWindow(date_from=date_from, date_to=date_to)
    return TrendsResponse.from_entity(await service.trends(user_id, window))


@router.get("/average-response-time", response_model=AverageResponseTimeResponse)
async def average_response_time(
    user_id: int = Depends(get_current_user_id),
    service: IDashboardService = Depends(get_dashboard_service)
):
    return AverageResponseTimeResponse.from_entity(await service.average_response_time(user_id))


@router.get("/recent-activities", response_model=RecentActivitiesResponse)
async def recent_activities(
    user_id: int = Depends(get_current_user_id),
    service: IDashboardService = Depends(get_dashboard_service)
):
    return RecentActivitiesResponse.from_entity(await service.recent_activities(user_id))
