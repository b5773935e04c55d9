"""
Howl Backend — Business SQLAlchemy Model
==========================================

What:  ORM model for the `businesses` table and the schema that governs
       which request fields may be written to it.
Who:   Used by BusinessService for CRUD and by Alembic for schema management.

Table Design:
    - Integer primary key: clients address businesses as /businesses/<int>,
      and the list endpoint orders by id ascending.
    - Every descriptive field is a plain string; values are stored exactly
      as the client sent them.
"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from howl.database import Base
from howl.validation import RecordSchema


class Business(Base):
    """
    A business listing.

    Lifecycle:
        1. Created from a validated POST body (storage assigns `id`)
        2. Replaced wholesale by PUT; every schema field is overwritten,
           `id` is preserved
        3. Deleted by DELETE; reviews and photos pointing at it stay behind
    """

    __tablename__ = "businesses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # ── Owner ─────────────────────────────────────────────────────────────
    ownerid: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    # ── Listing Details ───────────────────────────────────────────────────
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    state: Mapped[str] = mapped_column(String(64), nullable=False)
    zip: Mapped[str] = mapped_column(String(32), nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    subcategory: Mapped[str] = mapped_column(String(255), nullable=False)

    # ── Optional Contact ──────────────────────────────────────────────────
    website: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<Business(id={self.id}, name='{self.name}')>"


BUSINESS_SCHEMA = RecordSchema(
    "business",
    {
        "ownerid": True,
        "name": True,
        "address": True,
        "city": True,
        "state": True,
        "zip": True,
        "phone": True,
        "category": True,
        "subcategory": True,
        "website": False,
        "email": False,
    },
    model=Business,
)
