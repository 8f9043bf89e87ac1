"""Store interfaces consumed by the session policy engine."""

from __future__ import annotations

from typing import Any, Protocol

from fingerprint_auth.schemas import Account, LinkNonce


class AccountStore(Protocol):
    """Mapping from fingerprint hash to account record.

    ``update`` must run as a single critical section per fingerprint so that
    concurrent requests for the same browser never lose a nonce write.
    """

    def exists(self, fingerprint: str) -> bool: ...

    def get(self, fingerprint: str) -> Account: ...

    def create(self, fingerprint: str, account: Account) -> None: ...

    def update(self, fingerprint: str, **changes: Any) -> Account: ...


class LinkStore(Protocol):
    """Mapping from link id to pending link nonce."""

    def exists(self, link_id: str) -> bool: ...

    def get(self, link_id: str) -> LinkNonce: ...

    def create(self, link_id: str, link_nonce: LinkNonce) -> None: ...

    def remove(self, link_id: str) -> None: ...


def merge_account(account: Account, changes: dict[str, Any]) -> Account:
    """Return ``account`` with ``changes`` applied, rejecting unknown fields."""
    unknown = set(changes) - set(Account.model_fields)
    if unknown:
        raise TypeError(f"Unknown account fields: {', '.join(sorted(unknown))}")
    return Account.model_validate({**account.model_dump(), **changes})
