# src/fingerprint_auth/api/endpoints/__init__.py
"""API endpoint modules."""

from .session import router as session_router

__all__ = ["session_router"]
