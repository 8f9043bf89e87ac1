"""Session policy engine.

Decides, for a resolved fingerprint and the nonce token presented by the
caller, whether access is granted, and drives every account/link state
transition: issuing nonces on sign-in, tearing sessions down and creating or
consuming link requests. The engine never touches the HTTP layer; it returns
an :class:`Outcome` that the transport turns into a status code and cookie
mutations.
"""

from __future__ import annotations

import logging
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

from fingerprint_auth.core.errors import AccountNotFoundError
from fingerprint_auth.core.locks import KeyedLocks
from fingerprint_auth.core.settings import settings
from fingerprint_auth.db.time import now_ms
from fingerprint_auth.schemas import Account, LinkNonce, Nonce
from fingerprint_auth.services.crypto import CryptoService
from fingerprint_auth.stores.base import AccountStore, LinkStore

logger = logging.getLogger(__name__)

REASON_NO_HASH = "Hash doesn't exist"
REASON_NO_TOKEN = "Nonce token doesn't exist"
REASON_NO_USER = "User doesn't exist"
REASON_INCORRECT = "Nonce is incorrect"
REASON_OLD = "Nonce is old"
REASON_NO_NONCE = "Nonce doesn't exist"
REASON_MISSING_CREDENTIALS = "Hash or password is missing"
REASON_BAD_PASSWORD = "Password is incorrect"
REASON_NO_LINK_ID = "Nonce to link id doesn't exist"


class Decision(IntEnum):
    """Access decision, valued as the HTTP status it maps to."""

    GRANTED = 200
    BAD_REQUEST = 400
    UNAUTHORIZED = 401


@dataclass(frozen=True)
class AccessCheck:
    """Result of a side-effect free access check."""

    decision: Decision
    reason: str | None = None

    @property
    def granted(self) -> bool:
        return self.decision is Decision.GRANTED


@dataclass(frozen=True)
class Outcome:
    """Result of a caller-facing operation.

    ``token`` is the new session token to hand to the client, ``clear_session``
    tells the transport to drop the session cookie.
    """

    decision: Decision
    reason: str | None = None
    token: str | None = None
    link_id: str | None = None
    clear_session: bool = False

    @property
    def status_code(self) -> int:
        return int(self.decision)


def _short(fingerprint: str) -> str:
    return fingerprint[:12] or "<empty>"


class SessionPolicy:
    """Fingerprint/nonce session state machine over injected stores."""

    def __init__(
        self,
        accounts: AccountStore,
        links: LinkStore,
        crypto_service: CryptoService,
        *,
        nonce_ttl_ms: int | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._accounts = accounts
        self._links = links
        self._crypto = crypto_service
        self.nonce_ttl_ms = settings.nonce_ttl_ms if nonce_ttl_ms is None else nonce_ttl_ms
        self._clock = clock
        self._sign_in_locks = KeyedLocks()

    # --- Helpers --------------------------------------------------------------------
    def _find_account(self, fingerprint: str) -> Account | None:
        if not fingerprint:
            return None
        try:
            return self._accounts.get(fingerprint)
        except AccountNotFoundError:
            return None

    def _issue_nonce(self) -> Nonce:
        return Nonce(token=self._crypto.generate_token(), issued_at=self._clock())

    def _tear_down(self, fingerprint: str) -> bool:
        """Clear the active nonce of a known account; return True if one existed."""
        if not fingerprint or not self._accounts.exists(fingerprint):
            return False
        try:
            self._accounts.update(fingerprint, nonce=None)
        except AccountNotFoundError:
            return False
        logger.info("Session torn down for fingerprint %s", _short(fingerprint))
        return True

    def _deny(self, check: AccessCheck, fingerprint: str) -> Outcome:
        logger.debug("Denied fingerprint %s: %s", _short(fingerprint), check.reason)
        cleared = False
        if check.decision is Decision.UNAUTHORIZED:
            cleared = self._tear_down(fingerprint)
        return Outcome(check.decision, check.reason, clear_session=cleared)

    # --- Checks ---------------------------------------------------------------------
    def check_access(self, fingerprint: str, presented_token: str | None) -> AccessCheck:
        """Evaluate the presented nonce token without mutating any state.

        Conditions are evaluated in order and the first failing one wins.
        """
        if not fingerprint:
            return AccessCheck(Decision.UNAUTHORIZED, REASON_NO_HASH)
        if not presented_token:
            return AccessCheck(Decision.UNAUTHORIZED, REASON_NO_TOKEN)

        account = self._find_account(fingerprint)
        if account is None or account.nonce is None or not account.nonce.token:
            return AccessCheck(Decision.UNAUTHORIZED, REASON_NO_USER)
        if not secrets.compare_digest(
            presented_token.encode("utf-8"),
            account.nonce.token.encode("utf-8"),
        ):
            return AccessCheck(Decision.UNAUTHORIZED, REASON_INCORRECT)
        if not account.nonce.is_fresh(self._clock(), self.nonce_ttl_ms):
            return AccessCheck(Decision.UNAUTHORIZED, REASON_OLD)
        return AccessCheck(Decision.GRANTED)

    def derive_status(self, fingerprint: str, presented_token: str | None) -> AccessCheck:
        """Layer the 400/401 split on top of :meth:`check_access`.

        401 means the caller is identifiable but its credential is not valid;
        400 means the caller cannot be tied to an account at all.
        """
        check = self.check_access(fingerprint, presented_token)
        if not check.granted:
            return check
        if not fingerprint or self._find_account(fingerprint) is None:
            return AccessCheck(Decision.BAD_REQUEST, REASON_NO_USER)
        return check

    # --- Operations -----------------------------------------------------------------
    def verify_access(self, fingerprint: str, presented_token: str | None) -> Outcome:
        """Check access for a caller; any unauthorized result logs the account out."""
        check = self.derive_status(fingerprint, presented_token)
        if not check.granted:
            return self._deny(check, fingerprint)
        return Outcome(Decision.GRANTED)

    def sign_in(self, fingerprint: str, client_id: str, password: str | None) -> Outcome:
        """Sign up on first contact, or sign in to the fingerprint's account.

        A successful sign-in always issues a fresh nonce, invalidating any
        session previously open for the fingerprint. Sign-ins for the same
        fingerprint run one at a time, so a concurrent first sign-in sees the
        account created by the other and has to match its password.
        """
        password = (password or "").strip()
        if not fingerprint or not password:
            return Outcome(Decision.BAD_REQUEST, REASON_MISSING_CREDENTIALS)

        with self._sign_in_locks.hold(fingerprint):
            return self._sign_in_locked(fingerprint, client_id, password)

    def _sign_in_locked(self, fingerprint: str, client_id: str, password: str) -> Outcome:
        account = self._find_account(fingerprint)
        if account is not None and not self._crypto.verify_password(
            password, account.password_hash
        ):
            return self._deny(
                AccessCheck(Decision.UNAUTHORIZED, REASON_BAD_PASSWORD), fingerprint
            )

        nonce = self._issue_nonce()
        if account is None:
            self._accounts.create(
                fingerprint,
                Account(
                    client_id=client_id,
                    password_hash=self._crypto.hash_password(password),
                    nonce=nonce,
                ),
            )
            logger.info("Created account for fingerprint %s", _short(fingerprint))
        else:
            self._accounts.update(fingerprint, nonce=nonce)
            logger.info("Issued new nonce for fingerprint %s", _short(fingerprint))
        return Outcome(Decision.GRANTED, token=nonce.token)

    def sign_out(self, fingerprint: str, presented_token: str | None) -> Outcome:
        """Clear the session of an authenticated caller."""
        check = self.derive_status(fingerprint, presented_token)
        if not check.granted:
            logger.debug("Sign-out refused for %s: %s", _short(fingerprint), check.reason)
            return Outcome(check.decision, check.reason)
        return Outcome(Decision.GRANTED, clear_session=self._tear_down(fingerprint))

    def consume_link(
        self, fingerprint: str, presented_token: str | None, link_id: str | None
    ) -> Outcome:
        """Redeem a pending link request for an authenticated caller.

        Only the caller's own ``pending_link_id`` is cleared; the link nonce
        record is neither read nor removed.
        """
        check = self.derive_status(fingerprint, presented_token)
        if not link_id:
            check = AccessCheck(Decision.BAD_REQUEST, REASON_NO_LINK_ID)
        if not check.granted:
            return self._deny(check, fingerprint)

        try:
            self._accounts.update(fingerprint, pending_link_id=None)
        except AccountNotFoundError:
            return Outcome(Decision.BAD_REQUEST, REASON_NO_USER)
        logger.info("Link %s consumed by fingerprint %s", link_id[:12], _short(fingerprint))
        return Outcome(Decision.GRANTED)

    def request_link(self, fingerprint: str) -> Outcome:
        """Create a link nonce for an account holding a valid session nonce.

        A previous pending link is overwritten; its record stays in the link
        store.
        """
        account = self._find_account(fingerprint)
        if account is None:
            return self._deny(AccessCheck(Decision.BAD_REQUEST, REASON_NO_USER), fingerprint)

        now = self._clock()
        if account.nonce is None:
            return self._deny(AccessCheck(Decision.UNAUTHORIZED, REASON_NO_NONCE), fingerprint)
        if not account.nonce.is_fresh(now, self.nonce_ttl_ms):
            return self._deny(AccessCheck(Decision.UNAUTHORIZED, REASON_OLD), fingerprint)

        link_id = self._crypto.generate_token()
        self._links.create(
            link_id,
            LinkNonce(token=self._crypto.generate_token(), issued_at=now),
        )
        try:
            self._accounts.update(fingerprint, pending_link_id=link_id)
        except AccountNotFoundError:
            return Outcome(Decision.BAD_REQUEST, REASON_NO_USER)
        logger.info("Issued link nonce for fingerprint %s", _short(fingerprint))
        return Outcome(Decision.GRANTED, link_id=link_id)
