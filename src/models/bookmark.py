"""Bookmark model - the only persisted entity."""
from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


# Largest value the int4 primary key can hold
MAX_BOOKMARK_ID = 2**31 - 1


class Bookmark(Base):
    """A saved link with a title, optional description and a 1-5 rating."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_bookmarks_rating_range"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(Text)
    url: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer)
