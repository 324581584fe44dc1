"""
JWT Service Implementation
HS256 with a shared secret, or RS256 verification with a public key
"""
from datetime import datetime, timedelta, timezone
from typing import Dict

from jose import jwt, JWTError

from core.config import settings
from core.exceptions import AuthenticationException
from core.logging_config import logger
from application.services.auth.interfaces import IJwtService


class JwtService(IJwtService):
    """JWT service; the token subject is the numeric user ID"""

    def __init__(self, secret_key: str = None, algorithm: str = None, public_key: str = None):
        self.algorithm = algorithm or settings.JWT_ALGORITHM
        self.secret_key = secret_key or settings.JWT_SECRET_KEY
        self.public_key = public_key or settings.JWT_PUBLIC_KEY

        if self.algorithm.startswith("RS") and not self.public_key:
            raise ValueError(f"JWT_PUBLIC_KEY is required for {self.algorithm}")

    @property
    def verification_key(self) -> str:
        return self.public_key if self.algorithm.startswith("RS") else self.secret_key

    def create_access_token(self, user_id: int) -> str:
        """Create access token (symmetric algorithms only)"""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "exp": now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES),
            "iat": now,
            "type": "access",
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> Dict:
        """Verify and decode token"""
        try:
            return jwt.decode(token, self.verification_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.warning(f"JWT verification failed: {str(e)}")
            raise AuthenticationException("Invalid or expired token")

    def get_user_id(self, token: str) -> int:
        payload = self.verify_token(token)
        subject = payload.get("sub")
        try:
            return int(subject)
        except (TypeError, ValueError):
            logger.warning(f"JWT subject is not a user ID: {subject!r}")
            raise AuthenticationException("Invalid token subject")
