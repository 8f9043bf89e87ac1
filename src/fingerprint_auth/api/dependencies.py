"""Shared API dependencies for fingerprint resolution and session policy access."""

from typing import Annotated

from fastapi import Depends, Request

from fingerprint_auth.core.settings import Settings, settings
from fingerprint_auth.services.crypto import CryptoService
from fingerprint_auth.services.fingerprint import ClientFingerprint, FingerprintResolver
from fingerprint_auth.services.session_policy import SessionPolicy
from fingerprint_auth.stores import build_stores


def build_session_policy(config: Settings) -> SessionPolicy:
    """Wire stores and crypto primitives into a session policy engine."""
    accounts, links = build_stores(config)
    crypto_service = CryptoService(rounds=config.bcrypt_rounds, token_bytes=config.token_bytes)
    return SessionPolicy(accounts, links, crypto_service, nonce_ttl_ms=config.nonce_ttl_ms)


def get_session_policy(request: Request) -> SessionPolicy:
    """Return the session policy engine attached to the application."""
    policy: SessionPolicy = request.app.state.session_policy
    return policy


def get_fingerprint_resolver() -> FingerprintResolver:
    return FingerprintResolver(CryptoService())


def get_client_fingerprint(
    request: Request,
    resolver: Annotated[FingerprintResolver, Depends(get_fingerprint_resolver)],
) -> ClientFingerprint:
    """Resolve the caller's fingerprint, minting a client id when absent."""
    return resolver.resolve(request)


def get_nonce_token(request: Request) -> str:
    """Return the session nonce token presented in the request cookies."""
    return request.cookies.get(settings.nonce_cookie_name, "")


# Type aliases for dependency injection
SessionPolicyDep = Annotated[SessionPolicy, Depends(get_session_policy)]
FingerprintDep = Annotated[ClientFingerprint, Depends(get_client_fingerprint)]
NonceTokenDep = Annotated[str, Depends(get_nonce_token)]
