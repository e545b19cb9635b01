"""Data types, collaborator protocols and errors for credential checks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Mapping, Protocol


class AuthenticationError(Exception):
    """Base exception for authentication failures."""


class InvalidCredentialsError(AuthenticationError):
    """Raised when an email/password pair does not identify a user.

    Unknown emails and wrong passwords share this error and its message.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class AuthenticationServiceError(AuthenticationError):
    """Raised when a collaborator fails while checking credentials."""


class UserRecord(Protocol):
    id: int
    email: str
    hashed_password: str


class UserDirectory(Protocol):
    def find_by_email(self, email: str) -> UserRecord | None: ...


class PasswordHasher(Protocol):
    def verify(self, password: str, stored_hash: str) -> bool: ...


class TokenIssuer(Protocol):
    def sign(self, claims: Mapping[str, Any], *, expires_in: timedelta) -> str: ...


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Successful authentication: who the caller is and their session token."""

    user_id: int
    email: str
    token: str
