"""Video API endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.auth.dependencies import require_admin
from app.constants import DEFAULT_LANGUAGE
from app.database import get_db
from app.schemas import VideoCreate, VideoUpdate
from app.services import videos
from app.utils.db import PageRequest
from app.utils.exceptions import handle_database_error
from app.utils.logger import logger
from app.utils.serialization import serialize_uuid, serialize_video

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("")
async def get_videos(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    category: Optional[str] = Query(None, description="Category slug, or 'all'"),
    search: Optional[str] = Query(None, description="Substring of title or description"),
    lang: str = Query(DEFAULT_LANGUAGE),
    sort: Optional[str] = Query(None, description="<field>_<asc|desc>"),
    db: Session = Depends(get_db),
) -> dict:
    """
    List videos, newest first unless ``sort`` says otherwise.

    Returns:
        ``{videos, pagination: {total, page, limit, pages}}``
    """
    params = videos.VideoQuery(category=category, search=search, lang=lang, sort=sort)
    return videos.list_videos(db, params, PageRequest.from_query(page, limit))


@router.get("/{video_id}")
async def get_video(video_id: str, db: Session = Depends(get_db)) -> dict:
    return serialize_video(videos.get_video(db, video_id))


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_video(request: VideoCreate, db: Session = Depends(get_db)) -> dict:
    try:
        video = videos.create_video(db, request)
        return {"id": serialize_uuid(video.id), "message": "Video created successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create video: {e}", exc_info=True)
        raise handle_database_error(e, "create_video")


@router.put("/{video_id}", dependencies=[Depends(require_admin)])
async def update_video(video_id: str, request: VideoUpdate, db: Session = Depends(get_db)) -> dict:
    try:
        videos.update_video(db, video_id, request)
        return {"message": "Video updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update video {video_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_video")


@router.delete("/{video_id}", dependencies=[Depends(require_admin)])
async def delete_video(video_id: str, db: Session = Depends(get_db)) -> dict:
    try:
        videos.delete_video(db, video_id)
        return {"message": "Video deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete video {video_id}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_video")
