# src/fingerprint_auth/models/account.py
"""SQLAlchemy models for fingerprint-keyed accounts and pending link nonces."""

from __future__ import annotations

from sqlalchemy import BigInteger, Text
from sqlalchemy.orm import Mapped, mapped_column

from fingerprint_auth.db.session import Base


class AccountRecord(Base):
    """Account row keyed by the browser fingerprint hash.

    The current session nonce is flattened into two nullable columns; both are
    null while no session is active.
    """

    __tablename__ = "fingerprint_account"

    fingerprint: Mapped[str] = mapped_column(Text, primary_key=True)
    client_id: Mapped[str] = mapped_column(Text, nullable=False, default="")
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    nonce_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    nonce_issued_at: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    pending_link_id: Mapped[str | None] = mapped_column(Text, nullable=True)


class LinkNonceRecord(Base):
    """Pending link nonce awaiting redemption by a second client."""

    __tablename__ = "link_nonce"

    link_id: Mapped[str] = mapped_column(Text, primary_key=True)
    token: Mapped[str] = mapped_column(Text, nullable=False)
    issued_at: Mapped[int] = mapped_column(BigInteger, nullable=False)
