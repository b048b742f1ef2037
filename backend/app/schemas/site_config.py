"""Schemas for site configuration."""
from pydantic import BaseModel
from typing import Optional


class SocialLinks(BaseModel):
    instagram: Optional[str] = None
    youtube: Optional[str] = None
    vimeo: Optional[str] = None


class SiteConfigUpdate(BaseModel):
    contactEmail: Optional[str] = None
    socialLinks: Optional[SocialLinks] = None
