"""SQLAlchemy-backed account and link stores."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session, sessionmaker

from fingerprint_auth.core.errors import AccountNotFoundError, LinkNotFoundError
from fingerprint_auth.models import AccountRecord, LinkNonceRecord
from fingerprint_auth.schemas import Account, LinkNonce, Nonce
from fingerprint_auth.stores.base import merge_account


def _to_account(record: AccountRecord) -> Account:
    nonce = None
    if record.nonce_token is not None and record.nonce_issued_at is not None:
        nonce = Nonce(token=record.nonce_token, issued_at=record.nonce_issued_at)
    return Account(
        client_id=record.client_id,
        password_hash=record.password_hash,
        nonce=nonce,
        pending_link_id=record.pending_link_id,
    )


def _apply(record: AccountRecord, account: Account) -> None:
    record.client_id = account.client_id
    record.password_hash = account.password_hash
    record.nonce_token = account.nonce.token if account.nonce else None
    record.nonce_issued_at = account.nonce.issued_at if account.nonce else None
    record.pending_link_id = account.pending_link_id


class SqlAccountStore:
    """Account store persisting rows in the ``fingerprint_account`` table.

    Each call runs in its own transaction; ``update`` locks the row with
    ``SELECT ... FOR UPDATE`` where the dialect supports it.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def exists(self, fingerprint: str) -> bool:
        with self._session_factory() as db:
            return db.get(AccountRecord, fingerprint) is not None

    def get(self, fingerprint: str) -> Account:
        with self._session_factory() as db:
            record = db.get(AccountRecord, fingerprint)
            if record is None:
                raise AccountNotFoundError(fingerprint)
            return _to_account(record)

    def create(self, fingerprint: str, account: Account) -> None:
        with self._session_factory.begin() as db:
            record = db.get(AccountRecord, fingerprint, with_for_update=True)
            if record is None:
                record = AccountRecord(fingerprint=fingerprint)
                db.add(record)
            _apply(record, account)

    def update(self, fingerprint: str, **changes: Any) -> Account:
        with self._session_factory.begin() as db:
            record = db.get(AccountRecord, fingerprint, with_for_update=True)
            if record is None:
                raise AccountNotFoundError(fingerprint)
            updated = merge_account(_to_account(record), changes)
            _apply(record, updated)
            return updated


class SqlLinkStore:
    """Link store persisting rows in the ``link_nonce`` table."""

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory

    def exists(self, link_id: str) -> bool:
        with self._session_factory() as db:
            return db.get(LinkNonceRecord, link_id) is not None

    def get(self, link_id: str) -> LinkNonce:
        with self._session_factory() as db:
            record = db.get(LinkNonceRecord, link_id)
            if record is None:
                raise LinkNotFoundError(link_id)
            return LinkNonce(token=record.token, issued_at=record.issued_at)

    def create(self, link_id: str, link_nonce: LinkNonce) -> None:
        with self._session_factory.begin() as db:
            db.merge(
                LinkNonceRecord(
                    link_id=link_id,
                    token=link_nonce.token,
                    issued_at=link_nonce.issued_at,
                )
            )

    def remove(self, link_id: str) -> None:
        with self._session_factory.begin() as db:
            record = db.get(LinkNonceRecord, link_id)
            if record is not None:
                db.delete(record)
