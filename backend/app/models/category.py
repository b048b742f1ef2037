"""Video category model."""
from sqlalchemy import Column, String, DateTime, Uuid
import uuid
from app.database import Base
from app.utils.serialization import utcnow


class Category(Base):
    """Category addressed by a human-chosen slug (``category_id``)."""
    __tablename__ = "categories"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    category_id = Column(String, unique=True, nullable=False, index=True)  # slug, [a-z0-9-]+
    name_pt = Column(String, nullable=False)
    name_en = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
