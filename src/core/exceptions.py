"""
Exceptions that map directly onto HTTP error responses.

Every error the API reports on purpose derives from BookmarksAPIError. The
exception handlers in api.errors turn them into JSON responses; anything else
is treated as an internal error.
"""
from typing import Any


BOOKMARK_FIELDS: tuple[str, ...] = ("title", "url", "description", "rating")


class BookmarksAPIError(Exception):
    """Base class for errors with a fixed status code and client message."""

    status_code: int = 500
    message: str = "server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> dict[str, Any]:
        """Render the JSON body sent to the client."""
        return {"error": {"message": self.message}}


class UnauthorizedError(BookmarksAPIError):
    """Raised when the request lacks a valid bearer credential."""

    status_code = 401
    message = "Unauthorized request"

    def to_body(self) -> dict[str, Any]:
        """Unauthorized responses carry a flat error string."""
        return {"error": self.message}


class ValidationFailedError(BookmarksAPIError):
    """Base class for request payload problems (400)."""

    status_code = 400
    message = "Invalid request"


class MissingFieldError(ValidationFailedError):
    """Raised when a required field is absent or null on create."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Missing {field} in request body")


class InvalidUrlError(ValidationFailedError):
    """Raised when a url does not start with http:// or https://."""

    message = "'url' must be a valid URL"


class InvalidRatingError(ValidationFailedError):
    """Raised when a rating is not a whole number between 1 and 5."""

    message = "'rating' must be a number between 1 and 5"


class InvalidFieldError(ValidationFailedError):
    """Raised when a text field has the wrong type or is empty."""

    def __init__(self, field: str, requirement: str = "a non-empty string") -> None:
        self.field = field
        super().__init__(f"'{field}' must be {requirement}")


class EmptyUpdateError(ValidationFailedError):
    """Raised when a partial update supplies none of the mutable fields."""

    message = (
        "Request body must contain either "
        f"{', '.join(BOOKMARK_FIELDS[:-1])}, or {BOOKMARK_FIELDS[-1]}"
    )


class MalformedBodyError(ValidationFailedError):
    """Raised when the request body is not a JSON object."""

    message = "Request body must be a JSON object"


class BookmarkNotFoundError(BookmarksAPIError):
    """Raised when no bookmark exists for the requested id."""

    status_code = 404
    message = "Bookmark doesn't exist"


class InternalError(BookmarksAPIError):
    """Opaque error returned for unexpected failures."""

    status_code = 500
    message = "server error"


class RouteNotFoundError(BookmarksAPIError):
    """Raised when no route serves the requested path and method."""

    status_code = 404
    message = "Not Found"
