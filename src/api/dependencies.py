"""FastAPI dependencies for injection."""
import json
from typing import Any

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import get_credential_verifier, verify_api_token
from core.config import get_settings
from core.exceptions import BookmarkNotFoundError, MalformedBodyError
from db.session import get_async_session
from models.bookmark import MAX_BOOKMARK_ID, Bookmark
from services.bookmark_store import BookmarkStore


def get_bookmark_store(
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkStore:
    """Build the store adapter for this request's session."""
    return BookmarkStore(db)


async def get_existing_bookmark(
    bookmark_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
) -> Bookmark:
    """
    Load the bookmark named in the path or raise 404.

    Ids outside the key range cannot exist, so they are reported as missing
    without querying the store.
    """
    if not 1 <= bookmark_id <= MAX_BOOKMARK_ID:
        raise BookmarkNotFoundError()
    bookmark = await store.get_by_id(bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError()
    return bookmark


async def get_json_body(request: Request) -> dict[str, Any]:
    """
    Parse the request body as a JSON object.

    An empty body is treated as an empty object so that validation, not
    parsing, decides what is missing.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise MalformedBodyError() from e
    if not isinstance(data, dict):
        raise MalformedBodyError()
    return data


__all__ = [
    "get_async_session",
    "get_bookmark_store",
    "get_credential_verifier",
    "get_existing_bookmark",
    "get_json_body",
    "get_settings",
    "verify_api_token",
]
