# src/fingerprint_auth/api/__init__.py
"""HTTP API endpoints."""

from .endpoints import session_router

__all__ = ["session_router"]
