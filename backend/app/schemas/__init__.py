"""Pydantic schemas for request validation."""
from app.schemas.auth import LoginRequest, RegisterRequest, ProfileUpdate, ResetPasswordRequest
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.schemas.video import VideoCreate, VideoUpdate
from app.schemas.contact import ContactCreate, ContactStatusUpdate
from app.schemas.site_config import SiteConfigUpdate, SocialLinks

__all__ = [
    "LoginRequest",
    "RegisterRequest",
    "ProfileUpdate",
    "ResetPasswordRequest",
    "CategoryCreate",
    "CategoryUpdate",
    "VideoCreate",
    "VideoUpdate",
    "ContactCreate",
    "ContactStatusUpdate",
    "SiteConfigUpdate",
    "SocialLinks",
]
