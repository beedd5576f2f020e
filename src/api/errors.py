"""Exception handlers translating errors into JSON responses."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.exceptions import BookmarksAPIError, InternalError, ValidationFailedError

logger = logging.getLogger(__name__)


def _error_response(error: BookmarksAPIError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_body())


async def bookmarks_api_error_handler(
    request: Request,  # noqa: ARG001
    exc: BookmarksAPIError,
) -> JSONResponse:
    """Render an expected API error."""
    return _error_response(exc)


async def http_exception_handler(
    request: Request,  # noqa: ARG001
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Render framework-raised HTTP errors in the same shape as API errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": {"message": exc.detail}},
        headers=exc.headers,
    )


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report malformed path or query parameters as a 400."""
    logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
    return _error_response(ValidationFailedError())


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the real cause and return an opaque 500."""
    logger.exception(
        "Unhandled error during %s %s", request.method, request.url.path, exc_info=exc,
    )
    return _error_response(InternalError())


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(BookmarksAPIError, bookmarks_api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    # Store failures are handled like any other crash but without re-raising
    # through the server error middleware
    app.add_exception_handler(SQLAlchemyError, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)
