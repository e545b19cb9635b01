"""Tests for the authentication login endpoint."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from authgate.core.config import get_settings
from authgate.core.security import BcryptPasswordHasher, JwtTokenIssuer
from authgate.db import get_db
from authgate.main import app
from authgate.models.user import User
from authgate.scripts.create_user import create_user


@pytest.fixture()
def client(session_local: sessionmaker[Session]) -> Iterator[TestClient]:
    def override_get_db():
        with session_local() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    with session_local() as session:
        session.add(
            User(
                email="a@x.com",
                hashed_password=BcryptPasswordHasher(rounds=4).hash("pw"),
            )
        )
        session.commit()

    yield TestClient(app)

    app.dependency_overrides.pop(get_db, None)


def test_login_returns_user_and_token_for_valid_credentials(client: TestClient) -> None:
    response = client.post("/auth/login", json={"email": "a@x.com", "password": "pw"})

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"user", "token"}
    assert body["user"] == "a@x.com"

    claims = JwtTokenIssuer.from_settings(get_settings()).decode(body["token"])
    assert claims["sub"] == "1"
    assert claims["exp"] - claims["iat"] == 86400


def test_login_rejects_wrong_password_with_empty_body(client: TestClient) -> None:
    response = client.post("/auth/login", json={"email": "a@x.com", "password": "incorrect"})

    assert response.status_code == 401
    assert response.content == b""


def test_login_rejects_unknown_email_with_empty_body(client: TestClient) -> None:
    response = client.post("/auth/login", json={"email": "nobody@x.com", "password": "pw"})

    assert response.status_code == 401
    assert response.content == b""


def test_login_failures_are_indistinguishable(client: TestClient) -> None:
    unknown = client.post("/auth/login", json={"email": "nobody@x.com", "password": "pw"})
    mismatch = client.post("/auth/login", json={"email": "a@x.com", "password": "nope"})

    assert unknown.status_code == mismatch.status_code == 401
    assert unknown.content == mismatch.content
    assert unknown.headers.get("content-length") == mismatch.headers.get("content-length")


@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@x.com"},
        {"password": "pw"},
        {"email": "", "password": "pw"},
        {"email": "a@x.com", "password": ""},
    ],
)
def test_login_requires_non_empty_email_and_password(client: TestClient, payload: dict) -> None:
    response = client.post("/auth/login", json=payload)

    assert response.status_code == 422


def test_login_reports_directory_failure_as_internal_error() -> None:
    broken_session = MagicMock()
    broken_session.execute.side_effect = OperationalError("SELECT", {}, Exception("db down"))

    def override_get_db():
        yield broken_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        response = TestClient(app).post(
            "/auth/login", json={"email": "a@x.com", "password": "pw"}
        )
    finally:
        app.dependency_overrides.pop(get_db, None)

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


def test_login_matches_provisioned_email_regardless_of_case(
    session_local: sessionmaker[Session],
) -> None:
    def override_get_db():
        with session_local() as session:
            yield session

    with session_local() as session:
        create_user(
            session,
            email="Alice@X.com",
            password="pw",
            hasher=BcryptPasswordHasher(rounds=4),
        )

    app.dependency_overrides[get_db] = override_get_db
    try:
        client = TestClient(app)
        as_registered = client.post("/auth/login", json={"email": "Alice@X.com", "password": "pw"})
        upper = client.post("/auth/login", json={"email": " ALICE@X.COM ", "password": "pw"})
    finally:
        app.dependency_overrides.pop(get_db, None)

    assert as_registered.status_code == 200
    assert as_registered.json()["user"] == "alice@x.com"
    assert upper.status_code == 200


def test_login_reports_hasher_failure_as_internal_error(client: TestClient) -> None:
    with patch.object(
        BcryptPasswordHasher, "verify", side_effect=RuntimeError("bcrypt backend missing")
    ):
        response = client.post("/auth/login", json={"email": "a@x.com", "password": "pw"})

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
