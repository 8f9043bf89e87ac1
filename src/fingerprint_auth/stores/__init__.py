"""Account and link store backends."""

from __future__ import annotations

from fingerprint_auth.core.settings import Settings

from .base import AccountStore, LinkStore
from .memory import InMemoryAccountStore, InMemoryLinkStore
from .sql import SqlAccountStore, SqlLinkStore


def build_stores(config: Settings) -> tuple[AccountStore, LinkStore]:
    """Instantiate the account and link stores selected by ``config.store_backend``."""
    if config.store_backend == "sql":
        from fingerprint_auth.db.session import (
            build_engine,
            build_session_factory,
            create_tables,
        )

        engine = build_engine(config.database_url)
        create_tables(engine)
        session_factory = build_session_factory(engine)
        return SqlAccountStore(session_factory), SqlLinkStore(session_factory)
    return InMemoryAccountStore(), InMemoryLinkStore()


__all__ = [
    "AccountStore",
    "LinkStore",
    "InMemoryAccountStore",
    "InMemoryLinkStore",
    "SqlAccountStore",
    "SqlLinkStore",
    "build_stores",
]
