"""Video operations: listing with filters, and validated create/update/delete."""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.constants import DEFAULT_LANGUAGE
from app.models import Category, Video
from app.schemas import VideoCreate, VideoUpdate
from app.services import validators
from app.utils.db import PageRequest, get_by_field, get_by_id, paginate
from app.utils.exceptions import InvalidCategory, ValidationFailed, field_error
from app.utils.logger import logger
from app.utils.serialization import serialize_video

# Client-facing sort keys; "title" resolves to the title in the requested language
SORT_FIELDS = {
    "createdAt": lambda lang: Video.created_at,
    "updatedAt": lambda lang: Video.updated_at,
    "order": lambda lang: Video.order,
    "featured": lambda lang: Video.featured,
    "category": lambda lang: Video.category,
    "title": lambda lang: Video.title_en if lang == "en" else Video.title_pt,
    "title.pt": lambda lang: Video.title_pt,
    "title.en": lambda lang: Video.title_en,
}


@dataclass
class VideoQuery:
    category: Optional[str] = None
    search: Optional[str] = None
    lang: str = DEFAULT_LANGUAGE
    sort: Optional[str] = None


def parse_sort(sort: Optional[str], lang: str = DEFAULT_LANGUAGE):
    """
    Turn ``<field>_<asc|desc>`` into an ORDER BY clause.

    Without a value the newest videos come first. Only whitelisted fields are
    accepted; any suffix other than ``desc`` sorts ascending.
    """
    if not sort:
        return Video.created_at.desc()

    field, _, direction = sort.rpartition("_")
    if not field:
        field, direction = direction, "asc"

    column_for = SORT_FIELDS.get(field)
    if column_for is None:
        raise ValidationFailed(
            details=[field_error("sort", f"Cannot sort by '{field}'. Allowed: {', '.join(SORT_FIELDS)}")]
        )
    column = column_for(lang)
    return column.desc() if direction == "desc" else column.asc()


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_videos(db: Session, params: VideoQuery, page: PageRequest) -> Dict[str, Any]:
    lang = params.lang or DEFAULT_LANGUAGE
    validators.validate_language(lang)
    order_by = parse_sort(params.sort, lang)

    query = db.query(Video)
    if params.category and params.category != "all":
        query = query.filter(Video.category == params.category)

    if params.search:
        pattern = f"%{_escape_like(params.search)}%"
        title = Video.title_en if lang == "en" else Video.title_pt
        description = Video.description_en if lang == "en" else Video.description_pt
        query = query.filter(
            or_(title.ilike(pattern, escape="\\"), description.ilike(pattern, escape="\\"))
        )

    # Secondary key keeps pages stable when the primary key ties
    videos, pagination = paginate(query.order_by(order_by, Video.id), page)
    return {"videos": [serialize_video(v) for v in videos], "pagination": pagination}


def get_video(db: Session, video_id: str) -> Video:
    return get_by_id(db, Video, video_id, "Video not found")


def _ensure_category(db: Session, slug: str) -> None:
    if not get_by_field(db, Category, "category_id", slug):
        raise InvalidCategory()


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if value is not None else None


def create_video(db: Session, payload: VideoCreate) -> Video:
    validators.validate_video_create(payload)

    category = payload.category.strip()
    _ensure_category(db, category)

    description = payload.description
    video = Video(
        title_pt=payload.title.pt.strip(),
        title_en=payload.title.en.strip(),
        description_pt=_clean(description.pt) if description else None,
        description_en=_clean(description.en) if description else None,
        thumbnail=payload.thumbnail.strip(),
        video_url=payload.videoUrl.strip(),
        category=category,
        featured=payload.featured,
        order=payload.order,
    )
    db.add(video)
    db.commit()
    db.refresh(video)

    logger.info(f"Created video {video.id} in category {category}")
    return video


def update_video(db: Session, video_id: str, payload: VideoUpdate) -> Video:
    """Apply non-empty fields; a supplied category must exist."""
    validators.validate_video_update(payload)

    if payload.category and payload.category.strip():
        _ensure_category(db, payload.category.strip())

    video = get_video(db, video_id)

    if payload.title:
        if payload.title.pt and payload.title.pt.strip():
            video.title_pt = payload.title.pt.strip()
        if payload.title.en and payload.title.en.strip():
            video.title_en = payload.title.en.strip()

    if payload.description:
        if payload.description.pt:
            video.description_pt = payload.description.pt.strip()
        if payload.description.en:
            video.description_en = payload.description.en.strip()

    if payload.thumbnail and payload.thumbnail.strip():
        video.thumbnail = payload.thumbnail.strip()
    if payload.videoUrl and payload.videoUrl.strip():
        video.video_url = payload.videoUrl.strip()
    if payload.category and payload.category.strip():
        video.category = payload.category.strip()

    if payload.featured is not None:
        video.featured = payload.featured
    if payload.order is not None:
        video.order = payload.order

    db.commit()
    db.refresh(video)
    return video


def delete_video(db: Session, video_id: str) -> None:
    video = get_video(db, video_id)
    db.delete(video)
    db.commit()
    logger.info(f"Deleted video {video_id}")
