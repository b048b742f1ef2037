"""Schemas for category endpoints."""
from pydantic import BaseModel
from typing import Optional

from app.schemas.common import BilingualText


class CategoryCreate(BaseModel):
    categoryId: Optional[str] = None
    name: Optional[BilingualText] = None


class CategoryUpdate(BaseModel):
    """Partial update; omitted or blank fields keep their current value."""
    categoryId: Optional[str] = None
    name: Optional[BilingualText] = None
