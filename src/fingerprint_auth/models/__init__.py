# src/fingerprint_auth/models/__init__.py
"""SQLAlchemy models for the fingerprint auth service."""

from .account import AccountRecord, LinkNonceRecord

__all__ = ["AccountRecord", "LinkNonceRecord"]
