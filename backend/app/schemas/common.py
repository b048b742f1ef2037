"""Shared request fragments."""
from pydantic import BaseModel
from typing import Optional


class BilingualText(BaseModel):
    """Text supplied in both site languages."""
    pt: Optional[str] = None
    en: Optional[str] = None
