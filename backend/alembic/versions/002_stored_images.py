"""Stored images — record the uploading user of every image file.

Revision ID: 002_stored_images
Revises: 001_users_and_posts
Create Date: 2026-10-19

Files uploaded before this revision have no row and are never released.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "002_stored_images"
down_revision: Union[str, None] = "001_users_and_posts"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "stored_images",
        sa.Column("path", sa.String(1000), primary_key=True),
        sa.Column("owner_id", UUID(as_uuid=True), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_stored_images_owner_id", "stored_images", ["owner_id"])


def downgrade() -> None:
    op.drop_index("ix_stored_images_owner_id", table_name="stored_images")
    op.drop_table("stored_images")
