"""Utility script for provisioning user accounts."""

from __future__ import annotations

import argparse
import getpass
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from authgate.core.security import BcryptPasswordHasher
from authgate.db import SessionLocal
from authgate.models.user import User
from authgate.repositories.user import UserRepository, normalize_email

logger = logging.getLogger(__name__)


def create_user(
    session: Session,
    *,
    email: str,
    password: str,
    hasher: BcryptPasswordHasher | None = None,
) -> User:
    """Persist a user with a bcrypt-hashed password.

    Emails are stored in their normalized form (see ``normalize_email``).
    """

    repository = UserRepository()
    normalized_email = normalize_email(email)
    if not normalized_email:
        raise ValueError("Email must not be empty")
    existing = repository.get_by_email(session, normalized_email)
    if existing is not None:
        raise ValueError(f"A user with email {normalized_email!r} already exists")

    active_hasher = hasher or BcryptPasswordHasher()
    user = User(email=normalized_email, hashed_password=active_hasher.hash(password))
    repository.add(session, user)
    session.commit()
    session.refresh(user)
    logger.info("Created user id=%s", user.id)
    return user


def _resolve_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a user account")
    parser.add_argument("--email", help="Email address for the user")
    parser.add_argument(
        "--password",
        help="Password for the user (omit to securely prompt)",
    )
    parser.add_argument(
        "--prompt",
        action="store_true",
        help="Force interactive prompts for email and password",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _resolve_cli_args(argv)

    email = args.email
    password = args.password

    if args.prompt or not email:
        email = input("Email: ").strip()
    if not email:
        raise SystemExit("Email must be provided")

    if args.prompt or password is None:
        password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password must be provided")

    with SessionLocal() as session:
        try:
            user = create_user(session, email=email, password=password)
        except ValueError as exc:
            raise SystemExit(str(exc)) from exc
        except IntegrityError as exc:
            session.rollback()
            raise SystemExit("Failed to create user due to database constraint") from exc

    print(f"User created with id={user.id}")
    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation only
    raise SystemExit(main())
