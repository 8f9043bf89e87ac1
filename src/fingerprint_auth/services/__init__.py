# src/fingerprint_auth/services/__init__.py
"""Business logic services for the fingerprint auth service."""

from .crypto import CryptoService
from .fingerprint import ClientFingerprint, FingerprintResolver
from .session_policy import AccessCheck, Decision, Outcome, SessionPolicy

__all__ = [
    "AccessCheck",
    "ClientFingerprint",
    "CryptoService",
    "Decision",
    "FingerprintResolver",
    "Outcome",
    "SessionPolicy",
]
