"""In-process account and link stores.

State lives in plain dictionaries, so it is lost when the process exits. Writes
are serialized per key: two requests for the same fingerprint queue behind one
lock while requests for other fingerprints proceed.
"""

from __future__ import annotations

from typing import Any

from fingerprint_auth.core.errors import AccountNotFoundError, LinkNotFoundError
from fingerprint_auth.core.locks import KeyedLocks
from fingerprint_auth.schemas import Account, LinkNonce
from fingerprint_auth.stores.base import merge_account


class InMemoryAccountStore:
    """Account store backed by a dictionary keyed by fingerprint hash."""

    def __init__(self) -> None:
        self._accounts: dict[str, Account] = {}
        self._locks = KeyedLocks()

    def exists(self, fingerprint: str) -> bool:
        return fingerprint in self._accounts

    def get(self, fingerprint: str) -> Account:
        try:
            return self._accounts[fingerprint]
        except KeyError as err:
            raise AccountNotFoundError(fingerprint) from err

    def create(self, fingerprint: str, account: Account) -> None:
        with self._locks.hold(fingerprint):
            self._accounts[fingerprint] = account

    def update(self, fingerprint: str, **changes: Any) -> Account:
        with self._locks.hold(fingerprint):
            updated = merge_account(self.get(fingerprint), changes)
            self._accounts[fingerprint] = updated
            return updated

    def __len__(self) -> int:
        return len(self._accounts)


class InMemoryLinkStore:
    """Link store backed by a dictionary keyed by link id."""

    def __init__(self) -> None:
        self._links: dict[str, LinkNonce] = {}
        self._locks = KeyedLocks()

    def exists(self, link_id: str) -> bool:
        return link_id in self._links

    def get(self, link_id: str) -> LinkNonce:
        try:
            return self._links[link_id]
        except KeyError as err:
            raise LinkNotFoundError(link_id) from err

    def create(self, link_id: str, link_nonce: LinkNonce) -> None:
        with self._locks.hold(link_id):
            self._links[link_id] = link_nonce

    def remove(self, link_id: str) -> None:
        with self._locks.hold(link_id):
            self._links.pop(link_id, None)

    def __len__(self) -> int:
        return len(self._links)
