"""Models package."""
from app.models.user import User
from app.models.category import Category
from app.models.video import Video
from app.models.contact import Contact
from app.models.site_config import SiteConfig

__all__ = ["User", "Category", "Video", "Contact", "SiteConfig"]
