"""Bearer-token authentication and role checks for protected routes."""
from typing import Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.auth.tokens import InvalidToken, TokenService, get_token_service
from app.constants import Role
from app.database import get_db
from app.models import User
from app.utils.exceptions import Forbidden, Unauthorized
from app.utils.logger import logger

bearer_scheme = HTTPBearer(auto_error=False)


def authenticate(
    credentials: Optional[HTTPAuthorizationCredentials],
    db: Session,
    tokens: TokenService,
) -> User:
    """
    Resolve the bearer credential of a request to a stored user.

    Raises:
        Unauthorized: no bearer token, a token that fails verification, or a
            token whose user no longer exists
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authorized, no token provided")

    try:
        subject = tokens.verify(credentials.credentials)
    except InvalidToken as e:
        logger.debug(f"Rejected bearer token: {e}")
        raise Unauthorized("Not authorized, invalid token")

    try:
        user = db.get(User, UUID(subject))
    except ValueError:
        user = None

    if user is None:
        logger.warning(f"Valid token for missing user {subject}")
        raise Unauthorized("Not authorized, user no longer exists")
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> User:
    """FastAPI dependency for routes that need any authenticated user."""
    return authenticate(credentials, db, tokens)


def require_role(user: Optional[User], role: str) -> User:
    """Exact role match; there is no role hierarchy."""
    if user is None or user.role != role:
        raise Forbidden()
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """FastAPI dependency for admin-only routes."""
    return require_role(user, Role.ADMIN)
