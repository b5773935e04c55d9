"""Create businesses, reviews and photos tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  Initial schema. Reviews and photos point at businesses through an
       indexed `businessid` column with no FOREIGN KEY constraint, so
       deleting a business leaves its reviews and photos in place.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "businesses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("ownerid", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(255), nullable=False),
        sa.Column("state", sa.String(64), nullable=False),
        sa.Column("zip", sa.String(32), nullable=False),
        sa.Column("phone", sa.String(64), nullable=False),
        sa.Column("category", sa.String(255), nullable=False),
        sa.Column("subcategory", sa.String(255), nullable=False),
        sa.Column("website", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_businesses_ownerid", "businesses", ["ownerid"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("userid", sa.Integer(), nullable=False),
        sa.Column("businessid", sa.Integer(), nullable=False),
        sa.Column("dollars", sa.Integer(), nullable=False),
        sa.Column("stars", sa.Float(), nullable=False),
        sa.Column("review", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_reviews_businessid", "reviews", ["businessid"])

    op.create_table(
        "photos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("userid", sa.Integer(), nullable=False),
        sa.Column("businessid", sa.Integer(), nullable=False),
        sa.Column("caption", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_photos_businessid", "photos", ["businessid"])


def downgrade() -> None:
    op.drop_index("ix_photos_businessid", table_name="photos")
    op.drop_table("photos")
    op.drop_index("ix_reviews_businessid", table_name="reviews")
    op.drop_table("reviews")
    op.drop_index("ix_businesses_ownerid", table_name="businesses")
    op.drop_table("businesses")
