# src/fingerprint_auth/api/endpoints/session.py
"""Session endpoints: access checks, sign-in/out and account linking.

Every response is a bare status code. Failure reasons stay in the server log.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Response

from fingerprint_auth.api.dependencies import FingerprintDep, NonceTokenDep, SessionPolicyDep
from fingerprint_auth.core.settings import settings
from fingerprint_auth.schemas import SignInRequest
from fingerprint_auth.services.fingerprint import ClientFingerprint
from fingerprint_auth.services.session_policy import Outcome

router = APIRouter(tags=["session"])


def attach_client_id(response: Response, fingerprint: ClientFingerprint) -> None:
    """Set the client id cookie when it was minted for this request."""
    if not fingerprint.minted:
        return
    response.set_cookie(
        settings.client_id_cookie_name,
        fingerprint.client_id,
        max_age=settings.client_id_cookie_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite,
    )


def _respond(outcome: Outcome, fingerprint: ClientFingerprint) -> Response:
    response = Response(status_code=outcome.status_code)
    attach_client_id(response, fingerprint)
    if outcome.token:
        response.set_cookie(
            settings.nonce_cookie_name,
            outcome.token,
            httponly=True,
            secure=settings.cookie_secure,
            samesite=settings.cookie_samesite,
        )
    elif outcome.clear_session:
        response.delete_cookie(
            settings.nonce_cookie_name,
            httponly=True,
            secure=settings.cookie_secure,
            samesite=settings.cookie_samesite,
        )
    return response


@router.get("/check-access", summary="Check the session nonce", response_class=Response)
def check_access(
    fingerprint: FingerprintDep,
    nonce_token: NonceTokenDep,
    policy: SessionPolicyDep,
) -> Response:
    """Return 200 for a valid session; otherwise 401 and the session is torn down."""
    return _respond(policy.verify_access(fingerprint.hash, nonce_token), fingerprint)


@router.post("/sign-in", summary="Sign up or sign in", response_class=Response)
def sign_in(
    fingerprint: FingerprintDep,
    policy: SessionPolicyDep,
    payload: Annotated[SignInRequest | None, Body()] = None,
) -> Response:
    """Create the fingerprint's account on first use, or verify its password.

    On success the new nonce token is set as the session cookie.
    """
    password = payload.password if payload is not None else ""
    outcome = policy.sign_in(fingerprint.hash, fingerprint.client_id, password)
    return _respond(outcome, fingerprint)


@router.post("/sign-out", summary="End the current session", response_class=Response)
def sign_out(
    fingerprint: FingerprintDep,
    nonce_token: NonceTokenDep,
    policy: SessionPolicyDep,
) -> Response:
    return _respond(policy.sign_out(fingerprint.hash, nonce_token), fingerprint)


@router.get("/link/{link_id}", summary="Consume a link request", response_class=Response)
def consume_link(
    link_id: str,
    fingerprint: FingerprintDep,
    nonce_token: NonceTokenDep,
    policy: SessionPolicyDep,
) -> Response:
    outcome = policy.consume_link(fingerprint.hash, nonce_token, link_id)
    return _respond(outcome, fingerprint)


@router.get("/link/", include_in_schema=False, response_class=Response)
def consume_missing_link(
    fingerprint: FingerprintDep,
    nonce_token: NonceTokenDep,
    policy: SessionPolicyDep,
) -> Response:
    return _respond(policy.consume_link(fingerprint.hash, nonce_token, ""), fingerprint)


@router.get("/nonce-to-link", summary="Create a link request", response_class=Response)
def nonce_to_link(fingerprint: FingerprintDep, policy: SessionPolicyDep) -> Response:
    return _respond(policy.request_link(fingerprint.hash), fingerprint)
