"""Site-wide configuration model (single row)."""
from sqlalchemy import Column, String, DateTime
from app.database import Base
from app.constants import SITE_CONFIG_ID
from app.utils.serialization import utcnow


class SiteConfig(Base):
    __tablename__ = "site_config"

    id = Column(String(20), primary_key=True, default=SITE_CONFIG_ID)
    contact_email = Column(String, nullable=False)
    instagram = Column(String, nullable=True, default="")
    youtube = Column(String, nullable=True, default="")
    vimeo = Column(String, nullable=True, default="")
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
