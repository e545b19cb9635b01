"""Repository exports."""

from .user import SqlUserDirectory, UserRepository, normalize_email

__all__ = ["SqlUserDirectory", "UserRepository", "normalize_email"]
