"""Signed bearer tokens (JWT) carrying the user id."""
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Dict, Optional

import jwt

from app.config import settings


class InvalidToken(Exception):
    """Raised when a token is malformed, forged or expired."""


class TokenService:
    """Issues and verifies HMAC-signed JWTs for a single signing key."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: timedelta = timedelta(days=30)):
        if not secret:
            raise ValueError("JWT signing key is not configured")
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = expires_in

    def issue(self, subject_id: str, now: Optional[datetime] = None) -> str:
        """Create a token for ``subject_id`` that expires after ``expires_in``."""
        now = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "sub": str(subject_id),
            "iat": int(now.timestamp()),
            "exp": int((now + self.expires_in).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the subject id embedded in ``token``.

        Raises:
            InvalidToken: bad signature, malformed token, expired token or missing subject
        """
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidToken("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken("Invalid token") from e

        subject = payload.get("sub")
        if not subject:
            raise InvalidToken("Token has no subject")
        return subject


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built from settings."""
    return TokenService(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(days=settings.jwt_expires_days),
    )
