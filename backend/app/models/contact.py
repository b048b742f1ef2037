"""Contact inbox message model."""
from sqlalchemy import Column, String, Boolean, DateTime, Text, Uuid
import uuid
from app.database import Base
from app.utils.serialization import utcnow


class Contact(Base):
    """Message left through the public contact form."""
    __tablename__ = "contacts"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
