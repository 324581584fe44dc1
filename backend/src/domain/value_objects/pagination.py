"""
Pagination Value Object
Normalizes page/size input into bounded page, size, offset and page count
"""
from dataclasses import dataclass
from typing import Optional


DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class Pagination:
    """Bounded page window - immutable"""

    page: int
    size: int
    offset: int
    total_pages: int


def compute_pagination(
    page: Optional[int] = None,
    size: Optional[int] = None,
    total: int = 0,
    default_size: int = DEFAULT_PAGE_SIZE,
) -> Pagination:
    """
    Clamp page and size to >= 1 and derive offset and total pages.

    Integer ceiling division keeps huge totals exact; a negative total
    is treated as empty.
    """
    page = max(int(page if page is not None else DEFAULT_PAGE), 1)
    size = max(int(size if size is not None else default_size), 1)
    total = max(int(total), 0)

    offset = (page - 1) * size
    total_pages = -(-total // size)

    return Pagination(page=page, size=size, offset=offset, total_pages=total_pages)
