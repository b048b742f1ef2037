"""Site configuration endpoints."""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.auth.dependencies import require_admin
from app.database import get_db
from app.schemas import SiteConfigUpdate
from app.services import site_config
from app.utils.exceptions import handle_database_error
from app.utils.logger import logger
from app.utils.serialization import serialize_site_config

router = APIRouter(prefix="/api/config", tags=["config"])


@router.get("")
async def get_config(db: Session = Depends(get_db)) -> dict:
    """Public contact email and social links, created with defaults on first read."""
    try:
        return serialize_site_config(site_config.get_or_create_site_config(db))
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to load site configuration: {e}", exc_info=True)
        raise handle_database_error(e, "get_config")


@router.put("", dependencies=[Depends(require_admin)])
async def update_config(request: SiteConfigUpdate, db: Session = Depends(get_db)) -> dict:
    try:
        site_config.update_site_config(db, request)
        return {"message": "Settings updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update site configuration: {e}", exc_info=True)
        raise handle_database_error(e, "update_config")
