"""Pydantic schemas used by the FastAPI application."""

from .auth import LoginRequest, LoginResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
]
