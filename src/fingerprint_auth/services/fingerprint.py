"""Browser fingerprint resolution.

A fingerprint combines the request headers that are stable for one browser
with a long-lived client id cookie. The cookie is minted on first contact; the
minted value already takes part in the fingerprint of that first request so
that the follow-up requests carrying the cookie resolve to the same hash.
"""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from dataclasses import dataclass

from fastapi import Request

from fingerprint_auth.core.settings import settings
from fingerprint_auth.services.crypto import CryptoService

FINGERPRINT_HEADERS: tuple[str, ...] = (
    "user-agent",
    "accept",
    "accept-language",
    "accept-encoding",
)


@dataclass(frozen=True)
class ClientFingerprint:
    """Resolved identity of the calling browser."""

    hash: str
    client_id: str
    minted: bool = False


def compute_fingerprint(headers: Mapping[str, str], client_id: str) -> str:
    """Return the SHA-256 fingerprint of the header set and client id."""
    components = {name: headers.get(name, "") for name in FINGERPRINT_HEADERS}
    components["cid"] = client_id
    payload = json.dumps(components, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class FingerprintResolver:
    """Resolve requests to fingerprints, minting client ids when missing."""

    def __init__(self, crypto_service: CryptoService, cookie_name: str | None = None) -> None:
        self._crypto = crypto_service
        self.cookie_name = cookie_name or settings.client_id_cookie_name

    def resolve(self, request: Request) -> ClientFingerprint:
        client_id = request.cookies.get(self.cookie_name, "")
        minted = not client_id
        if minted:
            client_id = self._crypto.generate_token()
        return ClientFingerprint(
            hash=compute_fingerprint(request.headers, client_id),
            client_id=client_id,
            minted=minted,
        )
