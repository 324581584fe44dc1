"""
Application Tracking Endpoints
Create, list, inspect and soft-delete applications; append status events
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from application.services.application_tracking import IApplicationTrackingService
from domain.enums import StatusType
from domain.value_objects import ApplicationFilter
from presentation.api.v1.container import get_application_tracking_service
from presentation.api.v1.dependencies import get_current_user_id
from presentation.api.v1.schemas.application import (
    AddStatusRequest,
    ApplicationResponse,
    CreateApplicationRequest,
    PaginatedApplicationsResponse,
    StatusEventResponse,
)


router = APIRouter()


@router.post("/application", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def create_application(
    request: CreateApplicationRequest,
    user_id: int = Depends(get_current_user_id),
    service: IApplicationTrackingService = Depends(get_application_tracking_service)
):
    """Create an application; its history starts with an Applied event."""
    created = await service.create_application(
        owner_id=user_id,
        company=request.company,
        position=request.position,
        website=request.website,
        application_type=request.application_type,
    )
    return ApplicationResponse.from_entity(created)


@router.get("/application", response_model=PaginatedApplicationsResponse)
async def list_applications(
    search: Optional[str] = Query(None, description="Substring of company, position or website"),
    status_filter: Optional[StatusType] = Query(None, alias="status", description="Current status"),
    date_from: Optional[datetime] = Query(None, alias="from"),
    date_to: Optional[datetime] = Query(None, alias="to"),
    page: Optional[int] = Query(None),
    size: Optional[int] = Query(None),
    user_id: int = Depends(get_current_user_id),
    service: IApplicationTrackingService = Depends(get_application_tracking_service)
):
    """
    List the user's applications, newest first.

    **Parameters:**
    - search: case-insensitive match on company, position or website
    - status: matches the current (latest) status only
    - from / to: inclusive creation-time bounds
    - page / size: 1-based page; out-of-range values are clamped
    """
    filters = ApplicationFilter(
        search=search,
        status=status_filter,
        date_from=date_from,
        date_to=date_to,
        page=page,
        size=size,
    )
    result = await service.list_applications(user_id, filters)
    return PaginatedApplicationsResponse(
        items=[ApplicationResponse.from_entity(item) for item in result.items],
        total_items=result.total_items,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("/application/status", response_model=StatusEventResponse, status_code=status.HTTP_201_CREATED)
async def add_status(
    request: AddStatusRequest,
    user_id: int = Depends(get_current_user_id),
    service: IApplicationTrackingService = Depends(get_application_tracking_service)
):
    """Append a status event to one of the user's applications."""
    event = await service.add_status(
        actor_id=user_id,
        application_id=request.application_id,
        status_type=request.status_type,
        test_type=request.test_type,
        interview_type=request.interview_type,
        notes=request.notes,
    )
    return StatusEventResponse.from_entity(event)


@router.get("/application/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: int,
    user_id: int = Depends(get_current_user_id),
    service: IApplicationTrackingService = Depends(get_application_tracking_service)
):
    item = await service.get_application(user_id, application_id)
    return ApplicationResponse.from_entity(item)


@router.delete("/application/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    application_id: int,
    user_id: int = Depends(get_current_user_id),
    service: IApplicationTrackingService = Depends(get_application_tracking_service)
):
    await service.delete_application(user_id, application_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
