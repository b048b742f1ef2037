"""Authentication API endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.auth.dependencies import get_current_user
from app.auth.tokens import TokenService, get_token_service
from app.database import get_db
from app.models import User
from app.schemas import LoginRequest, ProfileUpdate, RegisterRequest, ResetPasswordRequest
from app.services import users
from app.utils.exceptions import handle_database_error
from app.utils.logger import logger

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login")
async def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """
    Authenticate with email and password.

    Returns:
        ``{token, user}`` on success; 401 ``invalid_credentials`` otherwise
    """
    try:
        return users.login(db, request, tokens)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Login error for {request.email}: {e}", exc_info=True)
        raise handle_database_error(e, "login")


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """
    Register an administrator account.

    Meant for initial setup only; deployments should block this route afterwards.
    """
    try:
        return users.register(db, request, tokens)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Registration failed for {request.email}: {e}", exc_info=True)
        raise handle_database_error(e, "register")


@router.get("/profile")
async def get_profile(user: User = Depends(get_current_user)) -> dict:
    return users.get_profile(user)


@router.put("/profile")
async def update_profile(
    request: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    try:
        return users.update_profile(db, user, request)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update profile of user {user.id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_profile")


@router.post("/reset-password")
async def reset_password(
    request: ResetPasswordRequest,
    db: Session = Depends(get_db),
) -> dict:
    """Acknowledge a password reset request for a known account."""
    return users.request_password_reset(db, request)
