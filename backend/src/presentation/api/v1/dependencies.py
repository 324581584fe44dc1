"""
FastAPI Dependencies
Current user from the bearer token
"""
from typing import Optional

from fastapi import Depends, Header

from application.services.auth.interfaces import IJwtService
from core.exceptions import AuthenticationException
from .container import get_jwt_service


async def get_current_user_id(
    authorization: Optional[str] = Header(None),
    jwt_service: IJwtService = Depends(get_jwt_service)
) -> int:
    """
    Get the authenticated user's ID from the JWT subject

    Usage:
        @router.get("/protected")
        async def protected_route(user_id: int = Depends(get_current_user_id)):
            ...
    """
    if not authorization:
        raise AuthenticationException("Missing authorization header")

    # Extract token from "Bearer <token>"
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AuthenticationException("Invalid authorization header format")

    return jwt_service.get_user_id(parts[1])
