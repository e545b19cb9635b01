"""Repository utilities for user persistence."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from authgate.models.user import User
from authgate.repositories.base import BaseRepository


def normalize_email(email: str) -> str:
    """Return the stored form of an email address: trimmed and lower-cased."""

    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """Data-access helper for user accounts."""

    def __init__(self) -> None:
        super().__init__(model=User)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return the user whose normalized email matches ``email``."""

        statement = select(self.model).where(self.model.email == normalize_email(email))
        result = session.execute(statement)
        return result.scalars().one_or_none()


class SqlUserDirectory:
    """User directory bound to a single request-scoped session.

    Lookups go through :func:`normalize_email`, the same rule used when
    users are provisioned, so addresses match regardless of case.
    """

    def __init__(self, session: Session, repository: UserRepository | None = None) -> None:
        self._session = session
        self._repository = repository or UserRepository()

    def find_by_email(self, email: str) -> User | None:
        return self._repository.get_by_email(self._session, email)
