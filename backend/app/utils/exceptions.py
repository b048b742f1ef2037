"""API error taxonomy and the handlers that render it as JSON."""
from typing import Any, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.utils.logger import logger


class ApiError(HTTPException):
    """Base class for errors that map onto an ``{"error": {...}}`` body."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "server_error"
    message = "Internal server error"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Any = None,
        code: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message or self.message
        self.code = code or self.code
        self.details = details
        super().__init__(status_code=status_code or self.status_code, detail=self.message)

    def to_dict(self) -> dict:
        body = {"code": self.code, "message": self.message}
        if self.details is not None:
            body["details"] = self.details
        return {"error": body}


class ValidationFailed(ApiError):
    """Raised with the full list of field-level failures."""
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    message = "Validation error"


class InvalidCredentials(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credentials"
    message = "Invalid credentials"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthorized"
    message = "Not authorized"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    message = "Not authorized, admin access only"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    message = "Resource not found"


class Conflict(ApiError):
    """Uniqueness conflict; ``user_exists`` is historically reported as 400."""
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"
    message = "Resource already exists"


class InvalidCategory(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "invalid_category"
    message = "Category does not exist"


class CategoryInUse(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "category_in_use"
    message = "Cannot delete a category that is used by videos"

    def __init__(self, count: int):
        super().__init__(details={"count": count})


class RateLimited(ApiError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "rate_limited"
    message = "Too many requests, please try again later"


class ServerError(ApiError):
    pass


def category_exists() -> Conflict:
    return Conflict("Category with this ID already exists", code="category_exists")


def user_exists() -> Conflict:
    return Conflict("User already exists", code="user_exists", status_code=status.HTTP_400_BAD_REQUEST)


def field_error(field: str, message: str) -> dict:
    """Build one entry of a ``validation_error`` details list."""
    return {"field": field, "message": message}


def handle_database_error(error: Exception, operation: str) -> ApiError:
    """
    Convert unexpected database errors to API errors.

    Args:
        error: The database error
        operation: Description of the operation that failed

    Returns:
        ApiError with appropriate status code
    """
    if isinstance(error, IntegrityError):
        return Conflict(f"Resource already exists: {operation}")

    details = str(error) if settings.is_development else None
    return ServerError(f"Database error during {operation}", details=details)


def _pydantic_details(exc: RequestValidationError) -> list[dict]:
    details = []
    for err in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        loc = [str(part) for part in err.get("loc", ())[1:]]
        details.append(field_error(".".join(loc) or "body", err.get("msg", "Invalid value")))
    return details


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    error = ValidationFailed(details=_pydantic_details(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        code, message = "not_found", "Resource not found"
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        code, message = "method_not_allowed", "Method not allowed"
    else:
        code, message = "http_error", str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"code": code, "message": message}},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
    error = ServerError(details=str(exc) if settings.is_development else None)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers that shape every error response."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
