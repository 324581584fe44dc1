"""Value Objects - Immutable objects defined by their attributes"""

from .application_filter import ApplicationFilter, TrendWindow
from .pagination import Pagination, compute_pagination
from .timestamps import ensure_utc, utc_now
__all__ = [
    "ApplicationFilter",
    "TrendWindow",
    "Pagination",
    "compute_pagination",
    "ensure_utc",
    "utc_now",
]
