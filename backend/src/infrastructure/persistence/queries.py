"""
Shared Query Building Blocks
Latest-status resolver and listing predicate builder
"""
from contextlib import contextmanager
from typing import List, Optional

from sqlalchemy import Select, Subquery, and_, false, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement

from core.exceptions import DataAccessException
from core.logging_config import logger
from domain.value_objects import ApplicationFilter, ensure_utc
from infrastructure.persistence.models import ApplicationModel, ApplicationStatusModel


@contextmanager
def data_access(operation: str):
    """Translate driver/pool failures into DataAccessException"""
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Database error during {operation}: {e}")
        raise DataAccessException(f"{operation} failed: {e}") from e


def owned_application_ids(owner_id: int) -> Select:
    """Ids of the owner's applications that are not soft-deleted"""
    return select(ApplicationModel.id).where(
        ApplicationModel.created_by == owner_id,
        ApplicationModel.deleted == false(),
    )


def _ranked_statuses(
    owner_id: Optional[int],
    application_id: Optional[int],
    name: str,
    newest_first: bool,
) -> Subquery:
    """One row per application: the top-ranked event in the chosen direction"""
    if newest_first:
        order_by = (ApplicationStatusModel.created_at.desc(), ApplicationStatusModel.id.desc())
    else:
        order_by = (ApplicationStatusModel.created_at.asc(), ApplicationStatusModel.id.asc())

    ranked = select(
        ApplicationStatusModel.application_id,
        ApplicationStatusModel.status_type,
        ApplicationStatusModel.created_at,
        func.row_number().over(
            partition_by=ApplicationStatusModel.application_id,
            order_by=order_by,
        ).label("event_rank"),
    )
    if owner_id is not None:
        ranked = ranked.where(ApplicationStatusModel.application_id.in_(owned_application_ids(owner_id)))
    if application_id is not None:
        ranked = ranked.where(ApplicationStatusModel.application_id == application_id)
    ranked = ranked.subquery(f"{name}_ranked")

    return (
        select(ranked.c.application_id, ranked.c.status_type, ranked.c.created_at)
        .where(ranked.c.event_rank == 1)
        .subquery(name)
    )


def latest_status_subquery(
    owner_id: Optional[int] = None,
    name: str = "latest_statuses",
    application_id: Optional[int] = None,
) -> Subquery:
    """
    One row per application: (application_id, status_type, created_at)
    of its latest status event.

    Latest = greatest created_at, ties broken by the greatest event id.
    Every "current status" surface (listing filter, dashboard counts,
    success rate, trends) selects from this subquery. The ranked set is
    narrowed to the owner's or to one application's events first.
    """
    return _ranked_statuses(owner_id, application_id, name, newest_first=True)


def first_status_subquery(owner_id: Optional[int] = None, name: str = "first_statuses") -> Subquery:
    """Earliest status event per application, same ordering reversed"""
    return _ranked_statuses(owner_id, None, name, newest_first=False)


def build_application_predicates(owner_id: int, filters: ApplicationFilter) -> List[ColumnElement]:
    """
    Predicate list shared by the listing count and page queries.

    All values are bound parameters. Ownership comes first; the remaining
    filters are optional and combine with AND.
    """
    predicates: List[ColumnElement] = [
        ApplicationModel.created_by == owner_id,
        ApplicationModel.deleted == false(),
    ]

    term = filters.search_term
    if term:
        predicates.append(
            or_(
                ApplicationModel.company.icontains(term, autoescape=True),
                ApplicationModel.position.icontains(term, autoescape=True),
                ApplicationModel.website.icontains(term, autoescape=True),
            )
        )

    if filters.status is not None:
        latest = latest_status_subquery(owner_id)
        predicates.append(
            ApplicationModel.id.in_(
                select(latest.c.application_id).where(latest.c.status_type == filters.status.value)
            )
        )

    if filters.date_from is not None:
        predicates.append(ApplicationModel.created_at >= ensure_utc(filters.date_from))

    if filters.date_to is not None:
        predicates.append(ApplicationModel.created_at <= ensure_utc(filters.date_to))

    return predicates


def count_query(predicates: List[ColumnElement]) -> Select:
    """COUNT(*) terminal for a predicate list"""
    return select(func.count(ApplicationModel.id)).where(and_(*predicates))


def page_query(predicates: List[ColumnElement], limit: int, offset: int) -> Select:
    """Newest-first page terminal for a predicate list"""
    return (
        select(ApplicationModel)
        .where(and_(*predicates))
        .order_by(ApplicationModel.created_at.desc(), ApplicationModel.id.desc())
        .limit(limit)
        .offset(offset)
    )
