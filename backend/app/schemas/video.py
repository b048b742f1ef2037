"""Schemas for video endpoints."""
from pydantic import BaseModel, Field
from typing import Optional

from app.schemas.common import BilingualText

# Bounds of the 32-bit integer column backing ``order``
ORDER_MIN = -2**31
ORDER_MAX = 2**31 - 1


class VideoCreate(BaseModel):
    title: Optional[BilingualText] = None
    description: Optional[BilingualText] = None
    thumbnail: Optional[str] = None
    videoUrl: Optional[str] = None
    category: Optional[str] = None
    featured: bool = False
    order: int = Field(0, ge=ORDER_MIN, le=ORDER_MAX)


class VideoUpdate(BaseModel):
    """Partial update; ``featured`` and ``order`` apply whenever present."""
    title: Optional[BilingualText] = None
    description: Optional[BilingualText] = None
    thumbnail: Optional[str] = None
    videoUrl: Optional[str] = None
    category: Optional[str] = None
    featured: Optional[bool] = None
    order: Optional[int] = Field(None, ge=ORDER_MIN, le=ORDER_MAX)
