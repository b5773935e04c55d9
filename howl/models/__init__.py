# Models package init
"""
Howl Backend — ORM Models
===========================

Importing this package registers every table with `Base.metadata`
(used by Alembic autogenerate and `Database.create_all`).
"""

from howl.models.business import BUSINESS_SCHEMA, Business
from howl.models.photo import PHOTO_SCHEMA, Photo
from howl.models.review import REVIEW_SCHEMA, Review

__all__ = [
    "Business",
    "Review",
    "Photo",
    "BUSINESS_SCHEMA",
    "REVIEW_SCHEMA",
    "PHOTO_SCHEMA",
]
