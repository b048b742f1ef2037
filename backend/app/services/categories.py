"""Category operations and the cross-entity rules tying categories to videos."""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.models import Category, Video
from app.schemas import CategoryCreate, CategoryUpdate
from app.services import validators
from app.services.videos import VideoQuery, list_videos
from app.utils.db import PageRequest, commit_unique, get_by_field, get_by_id
from app.utils.exceptions import CategoryInUse, category_exists
from app.utils.logger import logger
from app.utils.serialization import serialize_category


def find_by_slug(db: Session, slug: str) -> Optional[Category]:
    return get_by_field(db, Category, "category_id", slug)


def count_videos(db: Session, slug: str) -> int:
    return db.query(Video).filter(Video.category == slug).count()


def list_categories(db: Session) -> Dict[str, Any]:
    categories = db.query(Category).order_by(Category.name_pt.asc()).all()
    return {"categories": [serialize_category(c) for c in categories]}


def create_category(db: Session, payload: CategoryCreate) -> Category:
    validators.validate_category_create(payload)

    slug = payload.categoryId.strip()
    if find_by_slug(db, slug):
        raise category_exists()

    category = Category(
        category_id=slug,
        name_pt=payload.name.pt.strip(),
        name_en=payload.name.en.strip(),
    )
    db.add(category)
    commit_unique(db, category_exists)
    db.refresh(category)

    logger.info(f"Created category {slug} ({category.id})")
    return category


def update_category(db: Session, category_id: str, payload: CategoryUpdate) -> Category:
    """
    Apply a partial update, cascading a slug rename to every referencing video.

    The rename and the video rewrite are flushed in the same transaction and
    committed once, so readers never observe videos pointing at a slug that
    no longer exists.
    """
    validators.validate_category_update(payload)

    category = get_by_id(db, Category, category_id, "Category not found")

    new_slug = payload.categoryId.strip() if payload.categoryId and payload.categoryId.strip() else None
    if new_slug and new_slug != category.category_id:
        if find_by_slug(db, new_slug):
            raise category_exists()

        old_slug = category.category_id
        moved = (
            db.query(Video)
            .filter(Video.category == old_slug)
            .update({Video.category: new_slug}, synchronize_session=False)
        )
        category.category_id = new_slug
        logger.info(f"Renaming category {old_slug} -> {new_slug}, {moved} videos updated")

    if payload.name:
        if payload.name.pt and payload.name.pt.strip():
            category.name_pt = payload.name.pt.strip()
        if payload.name.en and payload.name.en.strip():
            category.name_en = payload.name.en.strip()

    commit_unique(db, category_exists)
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: str) -> None:
    """Delete a category no video references."""
    category = get_by_id(db, Category, category_id, "Category not found")

    in_use = count_videos(db, category.category_id)
    if in_use > 0:
        raise CategoryInUse(in_use)

    db.delete(category)
    db.commit()
    logger.info(f"Deleted category {category.category_id}")


def list_category_videos(db: Session, category_id: str, page: PageRequest, sort: Optional[str]) -> Dict[str, Any]:
    category = get_by_id(db, Category, category_id, "Category not found")
    return list_videos(db, VideoQuery(category=category.category_id, sort=sort), page)
