"""Store adapter issuing bookmark queries against the relational database."""
import logging
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate

logger = logging.getLogger(__name__)


class BookmarkStore:
    """
    Single-statement CRUD operations on the bookmarks table.

    Each mutating operation commits immediately; there is no unit of work
    spanning several calls. The session is owned by the caller.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> list[Bookmark]:
        """Return every bookmark ordered by id."""
        result = await self._session.execute(select(Bookmark).order_by(Bookmark.id))
        return list(result.scalars().all())

    async def get_by_id(self, bookmark_id: int) -> Bookmark | None:
        """Return the bookmark with the given id, or None if absent."""
        result = await self._session.execute(
            select(Bookmark).where(Bookmark.id == bookmark_id),
        )
        return result.scalar_one_or_none()

    async def insert(self, data: BookmarkCreate) -> Bookmark:
        """Persist a new bookmark and return it with its assigned id."""
        bookmark = Bookmark(**data.model_dump())
        self._session.add(bookmark)
        await self._session.commit()
        await self._session.refresh(bookmark)
        logger.info("Created bookmark %s", bookmark.id)
        return bookmark

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> int:
        """
        Write only the supplied fields onto an existing bookmark.

        Returns the number of affected rows; 0 means no such bookmark.
        """
        result = await self._session.execute(
            update(Bookmark)
            .where(Bookmark.id == bookmark_id)
            .values(**fields)
            .execution_options(synchronize_session=False),
        )
        await self._session.commit()
        logger.info("Updated bookmark %s (%s)", bookmark_id, ", ".join(sorted(fields)))
        return result.rowcount

    async def delete_by_id(self, bookmark_id: int) -> int:
        """Remove a bookmark. Returns the number of affected rows."""
        result = await self._session.execute(
            delete(Bookmark)
            .where(Bookmark.id == bookmark_id)
            .execution_options(synchronize_session=False),
        )
        await self._session.commit()
        logger.info("Deleted bookmark %s", bookmark_id)
        return result.rowcount
