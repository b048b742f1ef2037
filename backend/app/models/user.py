"""Administrative user model."""
from sqlalchemy import Column, String, DateTime, Uuid
import uuid
from app.database import Base
from app.constants import Role
from app.utils.serialization import utcnow


class User(Base):
    """Site administrator account."""
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    role = Column(String(20), nullable=False, default=Role.ADMIN)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
