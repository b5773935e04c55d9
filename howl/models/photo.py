"""
Howl Backend — Photo SQLAlchemy Model
=======================================

What:  ORM model for the `photos` table and its write schema.
"""

from typing import Optional

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from howl.database import Base
from howl.validation import RecordSchema


class Photo(Base):
    """A photo a user attached to a business. Only metadata is stored."""

    __tablename__ = "photos"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    userid: Mapped[int] = mapped_column(Integer, nullable=False)
    businessid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    caption: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Photo(id={self.id}, businessid={self.businessid})>"


PHOTO_SCHEMA = RecordSchema(
    "photo",
    {
        "userid": True,
        "businessid": True,
        "caption": False,
    },
    model=Photo,
)
