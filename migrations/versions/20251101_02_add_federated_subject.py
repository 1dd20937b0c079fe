"""add federated subject id to accounts

Revision ID: 20251101_02
Revises: 20251101_01
Create Date: 2025-11-01 09:10:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "20251101_02"
down_revision = "20251101_01"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.add_column("accounts", sa.Column("federated_subject_id", sa.String(length=255), nullable=True))
    op.create_index("ix_accounts_federated_subject_id", "accounts", ["federated_subject_id"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_accounts_federated_subject_id", table_name="accounts")
    op.drop_column("accounts", "federated_subject_id")
