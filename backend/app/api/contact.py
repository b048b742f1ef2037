"""Contact form and inbox endpoints."""
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.auth.dependencies import require_admin
from app.database import get_db
from app.schemas import ContactCreate, ContactStatusUpdate
from app.services import contacts
from app.services.notifier import ContactNotifier, get_notifier
from app.services.site_config import contact_recipient
from app.utils.db import PageRequest
from app.utils.exceptions import handle_database_error
from app.utils.logger import logger

router = APIRouter(prefix="/api/contact", tags=["contact"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_contact_message(
    request: ContactCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    notifier: ContactNotifier = Depends(get_notifier),
) -> dict:
    """
    Store a message from the public contact form and notify the site owner.

    The email goes out after the response; its failure never reaches the caller.
    """
    try:
        contact = contacts.create_contact(db, request)
        recipient = contact_recipient(db)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to store contact message: {e}", exc_info=True)
        raise handle_database_error(e, "send_contact_message")

    background_tasks.add_task(notifier.notify, recipient, contact.name, contact.email, contact.message)
    return {"message": "Message sent successfully"}


@router.get("/messages", dependencies=[Depends(require_admin)])
async def get_contact_messages(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    read: Optional[str] = Query(None, description="'true' or 'false'; anything else lists all"),
    db: Session = Depends(get_db),
) -> dict:
    return contacts.list_contacts(
        db,
        PageRequest.from_query(page, limit),
        read=contacts.parse_read_filter(read),
    )


@router.put("/messages/{message_id}", dependencies=[Depends(require_admin)])
async def update_message_status(
    message_id: str,
    request: ContactStatusUpdate,
    db: Session = Depends(get_db),
) -> dict:
    try:
        contacts.update_contact_status(db, message_id, request)
        return {"message": "Message status updated"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update message {message_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_message_status")


@router.delete("/messages/{message_id}", dependencies=[Depends(require_admin)])
async def delete_message(message_id: str, db: Session = Depends(get_db)) -> dict:
    try:
        contacts.delete_contact(db, message_id)
        return {"message": "Message deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete message {message_id}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_message")
