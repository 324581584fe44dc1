"""
Authentication Service Interfaces
Abstract base classes for authentication services
"""
from abc import ABC, abstractmethod
from typing import Dict


class IJwtService(ABC):
    """JWT token service interface"""

    @abstractmethod
    def create_access_token(self, user_id: int) -> str:
        """Create access token"""
        pass

    @abstractmethod
    def verify_token(self, token: str) -> Dict:
        """Verify and decode token"""
        pass

    @abstractmethod
    def get_user_id(self, token: str) -> int:
        """Verify token and return the numeric user ID from its subject"""
        pass
