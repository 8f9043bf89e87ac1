"""Database session configuration."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from fingerprint_auth.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Ensure model modules are imported so that metadata is populated when create_all runs.
import fingerprint_auth.models  # noqa: E402,F401


def build_engine(url: str | None = None) -> Engine:
    """Create an engine for ``url``, defaulting to the configured database."""
    url = url or settings.database_url
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables(bind: Engine) -> None:
    """Create all database tables."""
    Base.metadata.create_all(bind=bind)


def drop_tables(bind: Engine) -> None:
    """Drop all database tables."""
    Base.metadata.drop_all(bind=bind)
