"""
Howl Backend — Review SQLAlchemy Model
========================================

What:  ORM model for the `reviews` table and its write schema.

`businessid` is an indexed plain column rather than a FOREIGN KEY: reviews
outlive the business they describe, and the business detail endpoint finds
them with `WHERE businessid = :id`.
"""

from typing import Optional

from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from howl.database import Base
from howl.validation import RecordSchema


class Review(Base):
    """A user's review of one business: price level, rating, optional text."""

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    userid: Mapped[int] = mapped_column(Integer, nullable=False)
    businessid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # What: Price level, 1 ($) to 4 ($$$$)
    dollars: Mapped[int] = mapped_column(Integer, nullable=False)
    stars: Mapped[float] = mapped_column(Float, nullable=False)
    review: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, businessid={self.businessid}, stars={self.stars})>"


REVIEW_SCHEMA = RecordSchema(
    "review",
    {
        "userid": True,
        "businessid": True,
        "dollars": True,
        "stars": True,
        "review": False,
    },
    model=Review,
)
