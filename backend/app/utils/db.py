"""Database query utility functions."""
import math
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Type, Any
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, Query

from app.constants import DEFAULT_PAGE, DEFAULT_LIMIT, MAX_LIMIT
from app.utils.exceptions import ApiError, NotFound

T = TypeVar("T")


def get_by_id(
    db: Session,
    model: Type[T],
    id_value: str | UUID,
    error_message: Optional[str] = None,
) -> T:
    """
    Get a model instance by ID.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id_value: ID value (UUID string or UUID object)
        error_message: Custom error message if not found

    Returns:
        Model instance

    Raises:
        NotFound: If the id is malformed or no row matches
    """
    message = error_message or f"{model.__name__} not found"
    if isinstance(id_value, str):
        try:
            id_value = UUID(id_value)
        except ValueError:
            raise NotFound(message)

    instance = db.get(model, id_value)
    if not instance:
        raise NotFound(message)
    return instance


def get_by_field(
    db: Session,
    model: Type[T],
    field_name: str,
    field_value: Any,
) -> Optional[T]:
    """
    Get a model instance by a specific field.

    Args:
        db: Database session
        model: SQLAlchemy model class
        field_name: Name of the field to filter by
        field_value: Value to filter by

    Returns:
        Model instance or None
    """
    field = getattr(model, field_name)
    return db.query(model).filter(field == field_value).first()


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Lenient query-string integer: anything not a positive int yields the default."""
    try:
        parsed = int(value) if value is not None else 0
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


@dataclass
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_query(cls, page: Optional[str], limit: Optional[str]) -> "PageRequest":
        return cls(
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=min(parse_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def paginate(query: Query, page: PageRequest) -> tuple[list, dict]:
    """
    Run a query for one page and describe the whole result set.

    Returns:
        (items, pagination) where pagination is {total, page, limit, pages}
    """
    total = query.order_by(None).count()
    items = query.offset(page.offset).limit(page.limit).all()
    pagination = {
        "total": total,
        "page": page.page,
        "limit": page.limit,
        "pages": math.ceil(total / page.limit),
    }
    return items, pagination


def commit_unique(db: Session, conflict: Callable[[], ApiError]) -> None:
    """
    Commit, reporting a unique-constraint violation as ``conflict()``.

    Covers writers that raced past the lookup done before the insert/update.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise conflict()
