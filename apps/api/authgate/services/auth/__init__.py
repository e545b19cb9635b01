"""Credential authentication service."""

from authgate.services.auth.models import (
    AuthenticatedIdentity,
    AuthenticationError,
    AuthenticationServiceError,
    InvalidCredentialsError,
    PasswordHasher,
    TokenIssuer,
    UserDirectory,
    UserRecord,
)
from authgate.services.auth.service import SESSION_TOKEN_LIFETIME, CredentialAuthenticator

__all__ = [
    # Data classes
    "AuthenticatedIdentity",
    # Protocols
    "PasswordHasher",
    "TokenIssuer",
    "UserDirectory",
    "UserRecord",
    # Exceptions
    "AuthenticationError",
    "AuthenticationServiceError",
    "InvalidCredentialsError",
    # Service
    "CredentialAuthenticator",
    "SESSION_TOKEN_LIFETIME",
]
