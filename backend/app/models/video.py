"""Portfolio video model."""
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Text, Uuid
import uuid
from app.database import Base
from app.utils.serialization import utcnow


class Video(Base):
    """Video entry with bilingual title and description."""
    __tablename__ = "videos"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title_pt = Column(String, nullable=False)
    title_en = Column(String, nullable=False)
    description_pt = Column(Text, nullable=True)
    description_en = Column(Text, nullable=True)
    thumbnail = Column(String(500), nullable=False)
    video_url = Column(String(500), nullable=False)
    # Category slug by value, not a foreign key: renames are cascaded by the category service
    category = Column(String, nullable=False, index=True)
    featured = Column(Boolean, default=False, nullable=False)
    order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
