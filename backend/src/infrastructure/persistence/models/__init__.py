"""ORM Models Package"""

from .application import ApplicationModel, ApplicationStatusModel

__all__ = [
    "ApplicationModel",
    "ApplicationStatusModel",
]
