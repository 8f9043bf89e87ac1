# src/fingerprint_auth/services/crypto.py
"""Cryptographic services: password hashing and random token generation."""

from __future__ import annotations

import secrets

import bcrypt

from fingerprint_auth.core.settings import settings

# bcrypt only consumes the first 72 bytes of a password.
BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode_password(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class CryptoService:
    """Service handling credential hashing and unguessable token generation."""

    def __init__(self, rounds: int | None = None, token_bytes: int | None = None) -> None:
        self.rounds = rounds or settings.bcrypt_rounds
        self.token_bytes = token_bytes or settings.token_bytes

    def hash_password(self, password: str) -> str:
        """Return a salted bcrypt hash of ``password``."""
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode_password(password), salt).decode("ascii")

    @staticmethod
    def verify_password(password: str, password_hash: str) -> bool:
        """Return True if ``password`` matches ``password_hash``.

        Malformed stored hashes verify as False instead of raising.
        """
        try:
            return bcrypt.checkpw(_encode_password(password), password_hash.encode("ascii"))
        except ValueError:
            return False

    def generate_token(self) -> str:
        """Generate a cryptographically secure, URL and cookie safe token."""
        return secrets.token_urlsafe(self.token_bytes)
