"""create account and link nonce tables

Revision ID: 5c1e0a7d9b21
Revises:
Create Date: 2026-10-18 09:12:40.512331

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e0a7d9b21"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create fingerprint-keyed accounts and pending link nonces."""
    op.create_table(
        "fingerprint_account",
        sa.Column("fingerprint", sa.Text(), nullable=False),
        sa.Column("client_id", sa.Text(), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("nonce_token", sa.Text(), nullable=True),
        sa.Column("nonce_issued_at", sa.BigInteger(), nullable=True),
        sa.Column("pending_link_id", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("fingerprint"),
    )
    op.create_table(
        "link_nonce",
        sa.Column("link_id", sa.Text(), nullable=False),
        sa.Column("token", sa.Text(), nullable=False),
        sa.Column("issued_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("link_id"),
    )


def downgrade() -> None:
    op.drop_table("link_nonce")
    op.drop_table("fingerprint_account")
