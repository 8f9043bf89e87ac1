# tests/conftest.py
from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from fingerprint_auth.api.dependencies import get_fingerprint_resolver, get_session_policy
from fingerprint_auth.db.session import build_session_factory, create_tables, drop_tables
from fingerprint_auth.main import app as fastapi_app
from fingerprint_auth.services.crypto import CryptoService
from fingerprint_auth.services.fingerprint import ClientFingerprint, FingerprintResolver
from fingerprint_auth.services.session_policy import SessionPolicy
from fingerprint_auth.stores.memory import InMemoryAccountStore, InMemoryLinkStore
from fingerprint_auth.stores.sql import SqlAccountStore, SqlLinkStore

NONCE_TTL_MS = 120_000
# Lowest cost bcrypt accepts; keeps the suite fast.
TEST_BCRYPT_ROUNDS = 4
START_MS = 1_700_000_000_000


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = START_MS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class RecordingResolver(FingerprintResolver):
    """Resolver remembering the last fingerprint it produced."""

    last: ClientFingerprint | None = None

    def resolve(self, request: Request) -> ClientFingerprint:
        fingerprint = super().resolve(request)
        RecordingResolver.last = fingerprint
        return fingerprint


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="session")
def crypto_service() -> CryptoService:
    return CryptoService(rounds=TEST_BCRYPT_ROUNDS)


@pytest.fixture()
def account_store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture()
def link_store() -> InMemoryLinkStore:
    return InMemoryLinkStore()


@pytest.fixture()
def policy(
    account_store: InMemoryAccountStore,
    link_store: InMemoryLinkStore,
    crypto_service: CryptoService,
    clock: FakeClock,
) -> SessionPolicy:
    return SessionPolicy(
        account_store,
        link_store,
        crypto_service,
        nonce_ttl_ms=NONCE_TTL_MS,
        clock=clock,
    )


@pytest.fixture()
def sql_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_tables(engine)
    try:
        yield engine
    finally:
        drop_tables(engine)
        engine.dispose()


@pytest.fixture()
def sql_stores(sql_engine: Engine) -> tuple[SqlAccountStore, SqlLinkStore]:
    session_factory = build_session_factory(sql_engine)
    return SqlAccountStore(session_factory), SqlLinkStore(session_factory)


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture()
def resolver(crypto_service: CryptoService) -> RecordingResolver:
    RecordingResolver.last = None
    return RecordingResolver(crypto_service)


@pytest.fixture(autouse=True)
def override_dependencies(
    app: FastAPI,
    policy: SessionPolicy,
    resolver: RecordingResolver,
) -> Iterator[None]:
    app.dependency_overrides[get_session_policy] = lambda: policy
    app.dependency_overrides[get_fingerprint_resolver] = lambda: resolver
    try:
        yield
    finally:
        app.dependency_overrides.pop(get_session_policy, None)
        app.dependency_overrides.pop(get_fingerprint_resolver, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def current_fingerprint() -> str:
    """Return the fingerprint hash resolved for the latest request."""
    assert RecordingResolver.last is not None
    return RecordingResolver.last.hash
