"""
Dashboard Response Schemas
camelCase payloads for the dashboard widgets
"""
from datetime import date, datetime
from typing import List, Optional

from domain.entities import (
    ApplicationTrends,
    AverageResponseTime,
    DashboardCounts,
    RecentActivities,
    SuccessRate,
)
from domain.enums import StatusType
from .application import CamelModel


class DashboardCountsResponse(CamelModel):
    total: int
    interviews: int
    tests: int
    offers_awarded: int
    withdrawn: int
    rejected: int

    @classmethod
    def from_entity(cls, counts: DashboardCounts) -> "DashboardCountsResponse":
        return cls(
            total=counts.total,
            interviews=counts.interviews,
            tests=counts.tests,
            offers_awarded=counts.offers_awarded,
            withdrawn=counts.withdrawn,
            rejected=counts.rejected,
        )


class SuccessRateResponse(CamelModel):
    percentage: str
    message: str

    @classmethod
    def from_entity(cls, rate: SuccessRate) -> "SuccessRateResponse":
        return cls(percentage=rate.percentage, message=rate.message)


class StatusCountResponse(CamelModel):
    status: StatusType
    count: int


class DailyStatusCountResponse(CamelModel):
    status: StatusType
    date: date
    count: int


class TrendsResponse(CamelModel):
    """Bar: one row per status. Line: one row per day and status."""

    bar_data: List[StatusCountResponse]
    line_data: List[DailyStatusCountResponse]

    @classmethod
    def from_entity(cls, trends: ApplicationTrends) -> "TrendsResponse":
        return cls(
            bar_data=[StatusCountResponse(status=b.status, count=b.count) for b in trends.bar_data],
            line_data=[
                DailyStatusCountResponse(status=p.status, date=p.date, count=p.count)
                for p in trends.line_data
            ],
        )


class AverageResponseTimeResponse(CamelModel):
    average: str
    faster_message: str
    compared_to_message: str

    @classmethod
    def from_entity(cls, value: AverageResponseTime) -> "AverageResponseTimeResponse":
        return cls(
            average=value.average,
            faster_message=value.faster_message,
            compared_to_message=value.compared_to_message,
        )


class RecentActivityResponse(CamelModel):
    application_id: int
    company: str
    position: str
    current_status: StatusType
    previous_status: Optional[StatusType] = None
    last_updated: datetime


class RecentActivitiesResponse(CamelModel):
    activities: List[RecentActivityResponse]

    @classmethod
    def from_entity(cls, value: RecentActivities) -> "RecentActivitiesResponse":
        return cls(
            activities=[
                RecentActivityResponse(
                    application_id=a.application_id,
                    company=a.company,
                    position=a.position,
                    current_status=a.current_status,
                    previous_status=a.previous_status,
                    last_updated=a.last_updated,
                )
                for a in value.activities
            ]
        )
