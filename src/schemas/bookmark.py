"""Pydantic schemas and request validation for bookmark endpoints."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import (
    BOOKMARK_FIELDS,
    BookmarksAPIError,
    EmptyUpdateError,
    InvalidFieldError,
    InvalidRatingError,
    InvalidUrlError,
    MissingFieldError,
)


ALLOWED_URL_SCHEMES = ("http://", "https://")
MIN_RATING = 1
MAX_RATING = 5


def validate_url(url: Any) -> str:
    """Require an http:// or https:// URL."""
    if not isinstance(url, str) or not url.startswith(ALLOWED_URL_SCHEMES):
        raise ValueError("url must start with http:// or https://")
    return url


def validate_rating(rating: Any) -> int:
    """
    Coerce a rating to an int in [MIN_RATING, MAX_RATING].

    Numbers and numeric strings are accepted as long as they are whole
    (so 4, 4.0 and "4" are equivalent). Booleans are rejected even though
    Python treats them as ints.
    """
    if isinstance(rating, bool):
        raise ValueError("rating must be a number")
    if isinstance(rating, str):
        try:
            rating = float(rating.strip())
        except ValueError:
            raise ValueError("rating must be a number") from None
    if not isinstance(rating, int | float):
        raise ValueError("rating must be a number")
    if rating != rating or rating % 1 != 0:  # NaN or fractional
        raise ValueError("rating must be a whole number")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}")
    return int(rating)


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    url: str
    description: str
    rating: int

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, v: Any) -> str:
        """Validate url scheme."""
        return validate_url(v)

    @field_validator("rating", mode="before")
    @classmethod
    def check_rating(cls, v: Any) -> int:
        """Validate and normalize rating."""
        return validate_rating(v)


class BookmarkUpdate(BaseModel):
    """Schema for partially updating an existing bookmark."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, min_length=1)
    url: str | None = None
    description: str | None = None
    rating: int | None = None

    @field_validator("url", mode="before")
    @classmethod
    def check_url(cls, v: Any) -> str:
        """Validate url scheme if provided."""
        return validate_url(v)

    @field_validator("rating", mode="before")
    @classmethod
    def check_rating(cls, v: Any) -> int:
        """Validate and normalize rating if provided."""
        return validate_rating(v)


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses, already sanitized for output."""

    id: int
    title: str
    url: str
    description: str | None
    rating: int


def _to_api_error(exc: ValidationError) -> BookmarksAPIError:
    """Translate the first pydantic error into the matching API error."""
    field = str(exc.errors()[0]["loc"][0])
    if field == "url":
        return InvalidUrlError()
    if field == "rating":
        return InvalidRatingError()
    if field == "description":
        # Unlike the title, an empty description is allowed
        return InvalidFieldError(field, "a string")
    return InvalidFieldError(field)


def parse_bookmark_create(payload: dict[str, Any]) -> BookmarkCreate:
    """
    Validate a create request body.

    Every field must be present and non-null; the first missing one (in
    title, url, description, rating order) is reported.
    """
    for field in BOOKMARK_FIELDS:
        if payload.get(field) is None:
            raise MissingFieldError(field)
    try:
        return BookmarkCreate.model_validate(payload)
    except ValidationError as e:
        raise _to_api_error(e) from e


def parse_bookmark_update(payload: dict[str, Any]) -> BookmarkUpdate:
    """
    Validate a partial update request body.

    At least one mutable field must carry a truthy value. Null values count
    as not supplied; the url and rating rules match those used on create.
    """
    if not any(payload.get(field) for field in BOOKMARK_FIELDS):
        raise EmptyUpdateError()
    supplied = {
        field: payload[field]
        for field in BOOKMARK_FIELDS
        if payload.get(field) is not None
    }
    try:
        return BookmarkUpdate.model_validate(supplied)
    except ValidationError as e:
        raise _to_api_error(e) from e
