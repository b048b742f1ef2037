"""Field-level validation rules run before any mutation.

Every rule set collects all failures and raises a single ``ValidationFailed``
whose details list one ``{"field", "message"}`` entry per failing field.
Rules that need the database (uniqueness, category references) live in the
entity services and run only after these checks pass.
"""
import re
from typing import Optional

from app.constants import CATEGORY_ID_PATTERN, EMAIL_PATTERN, LANGUAGES, PASSWORD_MIN_LENGTH, URL_PATTERN
from app.schemas import (
    CategoryCreate,
    CategoryUpdate,
    ContactCreate,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    ResetPasswordRequest,
    SiteConfigUpdate,
    VideoCreate,
    VideoUpdate,
)
from app.utils.exceptions import ValidationFailed, field_error


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class FieldErrors:
    """Accumulates field failures for one request body."""

    def __init__(self):
        self.errors: list[dict] = []

    def add(self, field: str, message: str) -> None:
        self.errors.append(field_error(field, message))

    def require(self, field: str, value: Optional[str], message: str) -> bool:
        if is_blank(value):
            self.add(field, message)
            return False
        return True

    def match(self, field: str, value: Optional[str], pattern: re.Pattern, message: str) -> None:
        """Check ``pattern`` only when a non-blank value was supplied."""
        if not is_blank(value) and not pattern.match(value.strip()):
            self.add(field, message)

    def min_length(self, field: str, value: Optional[str], length: int) -> None:
        if value is not None and len(value) < length:
            self.add(field, f"Must be at least {length} characters")

    def raise_if_any(self) -> None:
        if self.errors:
            raise ValidationFailed(details=self.errors)


# Auth

def validate_login(payload: LoginRequest) -> None:
    errors = FieldErrors()
    errors.require("email", payload.email, "Email is required")
    errors.require("password", payload.password, "Password is required")
    errors.raise_if_any()


def validate_registration(payload: RegisterRequest) -> None:
    errors = FieldErrors()
    errors.require("name", payload.name, "Name is required")
    if errors.require("email", payload.email, "Email is required"):
        errors.match("email", payload.email, EMAIL_PATTERN, "Please provide a valid email")
    if errors.require("password", payload.password, "Password is required"):
        errors.min_length("password", payload.password, PASSWORD_MIN_LENGTH)
    errors.raise_if_any()


def validate_profile_update(payload: ProfileUpdate) -> None:
    errors = FieldErrors()
    errors.match("email", payload.email, EMAIL_PATTERN, "Please provide a valid email")
    if payload.password:
        errors.min_length("password", payload.password, PASSWORD_MIN_LENGTH)
    errors.raise_if_any()


def validate_reset_password(payload: ResetPasswordRequest) -> None:
    errors = FieldErrors()
    errors.require("email", payload.email, "Email is required")
    errors.raise_if_any()


# Categories

def _check_category_slug(errors: FieldErrors, value: Optional[str]) -> None:
    errors.match(
        "categoryId",
        value,
        CATEGORY_ID_PATTERN,
        "Category ID may only contain lowercase letters, numbers and hyphens",
    )


def validate_category_create(payload: CategoryCreate) -> None:
    errors = FieldErrors()
    errors.require("categoryId", payload.categoryId, "Category ID is required")
    _check_category_slug(errors, payload.categoryId)
    name = payload.name
    errors.require("name.pt", name.pt if name else None, "Portuguese name is required")
    errors.require("name.en", name.en if name else None, "English name is required")
    errors.raise_if_any()


def validate_category_update(payload: CategoryUpdate) -> None:
    errors = FieldErrors()
    _check_category_slug(errors, payload.categoryId)
    errors.raise_if_any()


# Videos

def _check_video_urls(errors: FieldErrors, thumbnail: Optional[str], video_url: Optional[str]) -> None:
    errors.match("thumbnail", thumbnail, URL_PATTERN, "Please provide a valid thumbnail URL")
    errors.match("videoUrl", video_url, URL_PATTERN, "Please provide a valid video URL")


def validate_video_create(payload: VideoCreate) -> None:
    errors = FieldErrors()
    title = payload.title
    errors.require("title.pt", title.pt if title else None, "Portuguese title is required")
    errors.require("title.en", title.en if title else None, "English title is required")
    errors.require("thumbnail", payload.thumbnail, "Thumbnail URL is required")
    errors.require("videoUrl", payload.videoUrl, "Video URL is required")
    errors.require("category", payload.category, "Category is required")
    _check_video_urls(errors, payload.thumbnail, payload.videoUrl)
    errors.raise_if_any()


def validate_video_update(payload: VideoUpdate) -> None:
    errors = FieldErrors()
    _check_video_urls(errors, payload.thumbnail, payload.videoUrl)
    errors.raise_if_any()


def validate_language(lang: Optional[str]) -> None:
    if lang not in LANGUAGES:
        raise ValidationFailed(
            details=[field_error("lang", f"Language must be one of: {', '.join(LANGUAGES)}")]
        )


# Contact and site configuration

def validate_contact(payload: ContactCreate) -> None:
    errors = FieldErrors()
    errors.require("name", payload.name, "Name is required")
    if errors.require("email", payload.email, "Email is required"):
        errors.match("email", payload.email, EMAIL_PATTERN, "Please provide a valid email")
    errors.require("message", payload.message, "Message is required")
    errors.raise_if_any()


def validate_site_config(payload: SiteConfigUpdate) -> None:
    errors = FieldErrors()
    if errors.require("contactEmail", payload.contactEmail, "Contact email is required"):
        errors.match("contactEmail", payload.contactEmail, EMAIL_PATTERN, "Please provide a valid email")
    errors.raise_if_any()
