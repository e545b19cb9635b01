"""Shared pytest configuration for the AuthGate API tests."""

from __future__ import annotations

import os

# Settings are read when authgate modules are imported, so these must be set first.
os.environ.setdefault("AUTHGATE_JWT_SECRET_KEY", "test-signing-secret")
os.environ.setdefault("AUTHGATE_DATABASE_URL_OVERRIDE", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from authgate.db.base import Base  # noqa: E402


@pytest.fixture()
def session_local() -> sessionmaker[Session]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False)
