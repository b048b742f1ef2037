"""Account operations: login, registration, profile and password reset."""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.auth.tokens import TokenService
from app.constants import Role
from app.models import User
from app.schemas import LoginRequest, ProfileUpdate, RegisterRequest, ResetPasswordRequest
from app.services import validators
from app.utils.db import commit_unique, get_by_field
from app.utils.exceptions import InvalidCredentials, NotFound, user_exists
from app.utils.hashing import hash_password, verify_password
from app.utils.logger import logger
from app.utils.serialization import serialize_user, utcnow


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_by_email(db: Session, email: Optional[str]) -> Optional[User]:
    if not email:
        return None
    return get_by_field(db, User, "email", normalize_email(email))


def _session_payload(user: User, tokens: TokenService) -> Dict[str, Any]:
    return {"token": tokens.issue(str(user.id)), "user": serialize_user(user)}


def login(db: Session, payload: LoginRequest, tokens: TokenService) -> Dict[str, Any]:
    """
    Check credentials and issue a bearer token.

    Unknown email and wrong password fail identically so callers cannot
    tell which accounts exist.
    """
    validators.validate_login(payload)

    user = find_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.password_hash):
        logger.info(f"Failed login for {payload.email}")
        raise InvalidCredentials()

    user.last_login = utcnow()
    db.commit()
    db.refresh(user)

    logger.info(f"User {user.id} logged in")
    return _session_payload(user, tokens)


def register(db: Session, payload: RegisterRequest, tokens: TokenService) -> Dict[str, Any]:
    """Create an account. Every registered account is an admin."""
    validators.validate_registration(payload)

    if find_by_email(db, payload.email):
        raise user_exists()

    user = User(
        name=payload.name.strip(),
        email=normalize_email(payload.email),
        password_hash=hash_password(payload.password),
        role=Role.ADMIN,
    )
    db.add(user)
    commit_unique(db, user_exists)
    db.refresh(user)

    logger.info(f"Registered user {user.id}")
    return _session_payload(user, tokens)


def get_profile(user: User) -> Dict[str, Any]:
    return serialize_user(user, include_last_login=True)


def update_profile(db: Session, user: User, payload: ProfileUpdate) -> Dict[str, Any]:
    """Apply non-empty fields; a new password is re-hashed."""
    validators.validate_profile_update(payload)

    if payload.email and payload.email.strip():
        email = normalize_email(payload.email)
        if email != user.email:
            other = find_by_email(db, email)
            if other and other.id != user.id:
                raise user_exists()
            user.email = email

    if payload.name and payload.name.strip():
        user.name = payload.name.strip()

    if payload.password:
        user.password_hash = hash_password(payload.password)

    commit_unique(db, user_exists)
    db.refresh(user)

    logger.info(f"Updated profile of user {user.id}")
    return serialize_user(user)


def request_password_reset(db: Session, payload: ResetPasswordRequest) -> Dict[str, str]:
    """Look up the account; delivering the reset link is not implemented."""
    validators.validate_reset_password(payload)

    user = find_by_email(db, payload.email)
    if not user:
        raise NotFound("User not found")

    logger.info(f"Password reset requested for user {user.id}")
    return {"message": "Password reset email sent"}
