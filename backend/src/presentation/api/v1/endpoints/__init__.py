"""
API V1 Endpoints Package
Exports routers used by main app
"""
from .applications import router as applications_router
from .dashboard import router as dashboard_router

__all__ = [
    "applications_router",
    "dashboard_router",
]
