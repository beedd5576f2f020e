"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Depends, Request, Response

from api.dependencies import get_bookmark_store, get_existing_bookmark, get_json_body
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkResponse, parse_bookmark_create, parse_bookmark_update
from services.bookmark_store import BookmarkStore
from services.sanitizer import sanitize_text

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


def serialize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """Build the client representation, sanitizing free-text fields."""
    return BookmarkResponse(
        id=bookmark.id,
        title=sanitize_text(bookmark.title),
        url=bookmark.url,
        description=sanitize_text(bookmark.description),
        rating=int(bookmark.rating),
    )


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    bookmarks = await store.list_all()
    return [serialize_bookmark(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    request: Request,
    response: Response,
    payload: dict[str, Any] = Depends(get_json_body),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> BookmarkResponse:
    """Create a new bookmark; the Location header points at the new resource."""
    data = parse_bookmark_create(payload)
    bookmark = await store.insert(data)
    response.headers["Location"] = request.app.url_path_for(
        "get_bookmark", bookmark_id=str(bookmark.id),
    )
    return serialize_bookmark(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return serialize_bookmark(bookmark)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
    payload: dict[str, Any] = Depends(get_json_body),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> None:
    """
    Partially update a bookmark.

    Only fields present in the body are written. Returns 404 before looking
    at the body if the bookmark does not exist.
    """
    data = parse_bookmark_update(payload)
    await store.update(bookmark.id, data.model_dump(exclude_unset=True))


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark: Bookmark = Depends(get_existing_bookmark),
    store: BookmarkStore = Depends(get_bookmark_store),
) -> None:
    """Delete a bookmark."""
    await store.delete_by_id(bookmark.id)
