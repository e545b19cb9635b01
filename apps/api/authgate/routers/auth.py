"""Authentication endpoints for the AuthGate API."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from authgate.core.config import Settings, get_settings
from authgate.core.security import BcryptPasswordHasher, JwtTokenIssuer
from authgate.db import get_db
from authgate.monitoring import record_authentication_outcome
from authgate.repositories.user import SqlUserDirectory
from authgate.schemas.auth import LoginRequest, LoginResponse
from authgate.services.auth import (
    AuthenticationServiceError,
    CredentialAuthenticator,
    InvalidCredentialsError,
)

router = APIRouter(prefix="/auth", tags=["Auth"])
_password_hasher = BcryptPasswordHasher()


def get_authenticator(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> CredentialAuthenticator:
    """Assemble a request-scoped authenticator from the configured collaborators."""

    return CredentialAuthenticator(
        directory=SqlUserDirectory(db),
        hasher=_password_hasher,
        issuer=JwtTokenIssuer.from_settings(settings),
    )


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        status.HTTP_401_UNAUTHORIZED: {"description": "Invalid credentials (empty body)"},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Authentication backend failure"},
    },
)
def login(
    payload: LoginRequest,
    authenticator: CredentialAuthenticator = Depends(get_authenticator),
) -> LoginResponse | Response:
    """Verify an email and password and return a session token."""

    try:
        identity = authenticator.authenticate(payload.email, payload.password)
    except InvalidCredentialsError:
        record_authentication_outcome("unauthorized")
        return Response(status_code=status.HTTP_401_UNAUTHORIZED)
    except AuthenticationServiceError:
        record_authentication_outcome("error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    record_authentication_outcome("success")
    return LoginResponse(user=identity.email, token=identity.token)
