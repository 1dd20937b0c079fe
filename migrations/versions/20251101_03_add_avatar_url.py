"""add avatar url to accounts

Revision ID: 20251101_03
Revises: 20251101_02
Create Date: 2025-11-01 09:20:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20251101_03"
down_revision = "20251101_02"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("accounts", sa.Column("avatar_url", sa.String(length=1024), nullable=True))


def downgrade() -> None:
    op.drop_column("accounts", "avatar_url")
