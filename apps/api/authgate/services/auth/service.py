"""Credential verification: directory lookup, password check, token issue."""

from __future__ import annotations

import logging
from datetime import timedelta

from authgate.services.auth.models import (
    AuthenticatedIdentity,
    AuthenticationServiceError,
    InvalidCredentialsError,
    PasswordHasher,
    TokenIssuer,
    UserDirectory,
)

logger = logging.getLogger(__name__)

SESSION_TOKEN_LIFETIME = timedelta(days=1)


class CredentialAuthenticator:
    """Exchange an email and password for a signed session token.

    The three collaborators are consulted strictly in order and each step
    only runs once the previous one has succeeded. Failures of the lookup
    or the password check collapse into a single
    :class:`InvalidCredentialsError`; anything a collaborator raises is
    reported as :class:`AuthenticationServiceError` instead.
    """

    def __init__(
        self,
        directory: UserDirectory,
        hasher: PasswordHasher,
        issuer: TokenIssuer,
    ) -> None:
        self._directory = directory
        self._hasher = hasher
        self._issuer = issuer

    def authenticate(self, email: str, password: str) -> AuthenticatedIdentity:
        if not email or not password:
            logger.warning("Rejected login attempt with missing credentials")
            raise InvalidCredentialsError()

        try:
            user = self._directory.find_by_email(email)
        except Exception as exc:
            logger.exception("User directory lookup failed")
            raise AuthenticationServiceError("User directory lookup failed") from exc

        if user is None:
            logger.warning("Rejected login attempt")
            raise InvalidCredentialsError()

        try:
            password_ok = self._hasher.verify(password, user.hashed_password)
        except Exception as exc:
            logger.exception("Password verification failed for user id=%s", user.id)
            raise AuthenticationServiceError("Password verification failed") from exc

        if not password_ok:
            logger.warning("Rejected login attempt")
            raise InvalidCredentialsError()

        try:
            token = self._issuer.sign({"sub": str(user.id)}, expires_in=SESSION_TOKEN_LIFETIME)
        except Exception as exc:
            logger.exception("Token signing failed for user id=%s", user.id)
            raise AuthenticationServiceError("Token signing failed") from exc

        logger.info("Authenticated user id=%s", user.id)
        return AuthenticatedIdentity(user_id=user.id, email=user.email, token=token)
