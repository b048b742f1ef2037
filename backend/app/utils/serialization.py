"""Serialization utilities for converting models to API responses."""
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID


def utcnow() -> datetime:
    """Timezone-aware current time, used as column default."""
    return datetime.now(timezone.utc)


def serialize_uuid(value: Optional[UUID]) -> Optional[str]:
    """
    Serialize UUID to string.

    Args:
        value: UUID value or None

    Returns:
        String representation or None
    """
    return str(value) if value else None


def serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    """
    Serialize datetime to ISO format string.

    Args:
        value: Datetime value or None

    Returns:
        ISO format string or None
    """
    return value.isoformat() if value else None


def bilingual(model: Any, field: str) -> Dict[str, Optional[str]]:
    """Collapse ``<field>_pt`` / ``<field>_en`` columns into ``{"pt", "en"}``."""
    return {
        "pt": getattr(model, f"{field}_pt"),
        "en": getattr(model, f"{field}_en"),
    }


def serialize_user(user: Any, include_last_login: bool = False) -> Dict[str, Any]:
    """Public view of a user; the password hash never leaves the service."""
    result = {
        "id": serialize_uuid(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
    }
    if include_last_login:
        result["lastLogin"] = serialize_datetime(user.last_login)
    return result


def serialize_category(category: Any) -> Dict[str, Any]:
    return {
        "id": serialize_uuid(category.id),
        "categoryId": category.category_id,
        "name": bilingual(category, "name"),
        "createdAt": serialize_datetime(category.created_at),
        "updatedAt": serialize_datetime(category.updated_at),
    }


def serialize_video(video: Any) -> Dict[str, Any]:
    return {
        "id": serialize_uuid(video.id),
        "title": bilingual(video, "title"),
        "description": bilingual(video, "description"),
        "thumbnail": video.thumbnail,
        "videoUrl": video.video_url,
        "category": video.category,
        "featured": video.featured,
        "order": video.order,
        "createdAt": serialize_datetime(video.created_at),
        "updatedAt": serialize_datetime(video.updated_at),
    }


def serialize_contact(contact: Any) -> Dict[str, Any]:
    return {
        "id": serialize_uuid(contact.id),
        "name": contact.name,
        "email": contact.email,
        "message": contact.message,
        "read": contact.read,
        "createdAt": serialize_datetime(contact.created_at),
    }


def serialize_site_config(config: Any) -> Dict[str, Any]:
    return {
        "contactEmail": config.contact_email,
        "socialLinks": {
            "instagram": config.instagram or "",
            "youtube": config.youtube or "",
            "vimeo": config.vimeo or "",
        },
    }
