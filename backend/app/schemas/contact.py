"""Schemas for the contact inbox."""
from pydantic import BaseModel
from typing import Optional


class ContactCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    message: Optional[str] = None


class ContactStatusUpdate(BaseModel):
    read: Optional[bool] = None
