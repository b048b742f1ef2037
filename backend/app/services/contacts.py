"""Contact inbox: public submissions and admin triage."""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.models import Contact
from app.schemas import ContactCreate, ContactStatusUpdate
from app.services import validators
from app.utils.db import PageRequest, get_by_id, paginate
from app.utils.logger import logger
from app.utils.serialization import serialize_contact


def parse_read_filter(value: Optional[str]) -> Optional[bool]:
    """Only the exact strings "true"/"false" filter; anything else means no filter."""
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def create_contact(db: Session, payload: ContactCreate) -> Contact:
    validators.validate_contact(payload)

    contact = Contact(
        name=payload.name.strip(),
        email=payload.email.strip().lower(),
        message=payload.message.strip(),
    )
    db.add(contact)
    db.commit()
    db.refresh(contact)

    logger.info(f"Stored contact message {contact.id}")
    return contact


def list_contacts(db: Session, page: PageRequest, read: Optional[bool] = None) -> Dict[str, Any]:
    query = db.query(Contact)
    if read is not None:
        query = query.filter(Contact.read == read)

    messages, pagination = paginate(query.order_by(Contact.created_at.desc(), Contact.id), page)
    return {"messages": [serialize_contact(m) for m in messages], "pagination": pagination}


def update_contact_status(db: Session, contact_id: str, payload: ContactStatusUpdate) -> Contact:
    contact = get_by_id(db, Contact, contact_id, "Message not found")
    if payload.read is not None:
        contact.read = payload.read
    db.commit()
    db.refresh(contact)
    return contact


def delete_contact(db: Session, contact_id: str) -> None:
    contact = get_by_id(db, Contact, contact_id, "Message not found")
    db.delete(contact)
    db.commit()
    logger.info(f"Deleted contact message {contact_id}")
