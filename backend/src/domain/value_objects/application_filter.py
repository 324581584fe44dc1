"""
Listing Filter Value Objects
Optional, independently composable filters for listings and trend charts
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..enums import StatusType
from .timestamps import ensure_utc


@dataclass(frozen=True)
class ApplicationFilter:
    """Listing filter - every field optional"""

    search: Optional[str] = None
    status: Optional[StatusType] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    page: Optional[int] = None
    size: Optional[int] = None

    @property
    def search_term(self) -> Optional[str]:
        """Trimmed search text, or None when blank"""
        if self.search is None:
            return None
        term = self.search.strip()
        return term or None


@dataclass(frozen=True)
class TrendWindow:
    """Date window for trend charts; open ends are filled by resolve()"""

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None

    def resolve(self, now: datetime) -> Tuple[datetime, datetime]:
        """Default to the start of the current calendar month until now"""
        now = ensure_utc(now)
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        date_from = self.date_from or month_start
        date_to = self.date_to or now
        return ensure_utc(date_from), ensure_utc(date_to)

