"""Tests for the user provisioning script."""

from __future__ import annotations

import pytest
from sqlalchemy.orm import Session, sessionmaker

from authgate.core.security import BcryptPasswordHasher
from authgate.scripts.create_user import create_user


@pytest.fixture()
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


def test_create_user_hashes_password(
    session_local: sessionmaker[Session], hasher: BcryptPasswordHasher
) -> None:
    with session_local() as session:
        user = create_user(session, email="a@x.com", password="secret", hasher=hasher)
        assert user.id is not None
        assert user.hashed_password != "secret"
        assert hasher.verify("secret", user.hashed_password)


def test_create_user_normalizes_email(
    session_local: sessionmaker[Session], hasher: BcryptPasswordHasher
) -> None:
    with session_local() as session:
        user = create_user(session, email="  A@X.com ", password="secret", hasher=hasher)

    assert user.email == "a@x.com"


def test_create_user_rejects_duplicates(
    session_local: sessionmaker[Session], hasher: BcryptPasswordHasher
) -> None:
    with session_local() as session:
        create_user(session, email="a@x.com", password="secret", hasher=hasher)

    with session_local() as session:
        with pytest.raises(ValueError, match="already exists"):
            create_user(session, email="A@x.com", password="other", hasher=hasher)


def test_create_user_rejects_blank_email(
    session_local: sessionmaker[Session], hasher: BcryptPasswordHasher
) -> None:
    with session_local() as session:
        with pytest.raises(ValueError, match="Email must not be empty"):
            create_user(session, email="   ", password="secret", hasher=hasher)
