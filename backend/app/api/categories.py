"""Category API endpoints."""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.auth.dependencies import require_admin
from app.database import get_db
from app.schemas import CategoryCreate, CategoryUpdate
from app.services import categories
from app.utils.db import PageRequest
from app.utils.exceptions import handle_database_error
from app.utils.logger import logger
from app.utils.serialization import serialize_uuid

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
async def get_categories(db: Session = Depends(get_db)) -> dict:
    """All categories, alphabetical by Portuguese name."""
    return categories.list_categories(db)


@router.get("/{category_id}/videos")
async def get_category_videos(
    category_id: str,
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    sort: Optional[str] = Query(None, description="<field>_<asc|desc>"),
    db: Session = Depends(get_db),
) -> dict:
    return categories.list_category_videos(db, category_id, PageRequest.from_query(page, limit), sort)


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[Depends(require_admin)])
async def create_category(request: CategoryCreate, db: Session = Depends(get_db)) -> dict:
    try:
        category = categories.create_category(db, request)
        return {"id": serialize_uuid(category.id), "message": "Category created successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create category: {e}", exc_info=True)
        raise handle_database_error(e, "create_category")


@router.put("/{category_id}", dependencies=[Depends(require_admin)])
async def update_category(category_id: str, request: CategoryUpdate, db: Session = Depends(get_db)) -> dict:
    """
    Update a category. Renaming ``categoryId`` moves every video of the old
    slug to the new one in the same transaction.
    """
    try:
        categories.update_category(db, category_id, request)
        return {"message": "Category updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update category {category_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_category")


@router.delete("/{category_id}", dependencies=[Depends(require_admin)])
async def delete_category(category_id: str, db: Session = Depends(get_db)) -> dict:
    try:
        categories.delete_category(db, category_id)
        return {"message": "Category deleted successfully"}
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete category {category_id}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_category")
