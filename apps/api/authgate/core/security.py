"""Security helpers for password hashing and JWT generation."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

import bcrypt

from authgate.core.config import Settings, get_settings

logger = logging.getLogger(__name__)

_SUPPORTED_ALGORITHMS = {"HS256": hashlib.sha256}


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64decode(data: str) -> bytes:
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


class BcryptPasswordHasher:
    """Hash and verify passwords with bcrypt.

    bcrypt only reads the first 72 bytes of a password. Older bcrypt
    releases and bcryptjs truncated silently while bcrypt 5 raises, so the
    cut is made here to keep existing hashes verifiable across versions.
    """

    max_password_bytes = 72

    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    def _encode(self, password: str) -> bytes:
        return password.encode("utf-8")[: self.max_password_bytes]

    def hash(self, password: str) -> str:
        """Return a bcrypt hash for ``password``."""

        if not password:
            raise ValueError("Password must not be empty")
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(self._encode(password), salt).decode("utf-8")

    def verify(self, password: str, stored_hash: str) -> bool:
        """Check ``password`` against a stored bcrypt hash.

        A stored hash bcrypt cannot parse counts as a mismatch.
        """

        try:
            return bcrypt.checkpw(self._encode(password), stored_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False


class JwtTokenIssuer:
    """Sign and decode HMAC JWTs with a configured secret."""

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        if not secret_key:
            raise ValueError("JWT secret key must not be empty")
        if algorithm not in _SUPPORTED_ALGORITHMS:
            raise ValueError(f"Unsupported JWT algorithm {algorithm!r}")
        self._secret = secret_key.encode("utf-8")
        self._algorithm = algorithm
        self._digest = _SUPPORTED_ALGORITHMS[algorithm]

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "JwtTokenIssuer":
        active_settings = settings or get_settings()
        return cls(
            active_settings.jwt_secret_key.get_secret_value(),
            algorithm=active_settings.jwt_algorithm,
        )

    def _signature(self, signing_input: bytes) -> bytes:
        return hmac.new(self._secret, signing_input, self._digest).digest()

    def sign(
        self,
        claims: Mapping[str, Any],
        *,
        expires_in: timedelta,
        now: datetime | None = None,
    ) -> str:
        """Generate a signed JWT carrying ``claims`` that expires after ``expires_in``."""

        issued_at = now or datetime.now(timezone.utc)
        expires = issued_at + expires_in

        header = {"alg": self._algorithm, "typ": "JWT"}
        payload: dict[str, Any] = dict(claims)
        payload["iat"] = int(issued_at.timestamp())
        payload["exp"] = int(expires.timestamp())

        header_segment = _b64encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
        payload_segment = _b64encode(
            json.dumps(payload, separators=(",", ":")).encode("utf-8")
        )

        signing_input = f"{header_segment}.{payload_segment}".encode("ascii")
        signature_segment = _b64encode(self._signature(signing_input))

        return f"{header_segment}.{payload_segment}.{signature_segment}"

    def decode(self, token: str) -> dict[str, Any]:
        """Decode and validate a JWT created by :meth:`sign`."""

        parts = token.split(".")
        if len(parts) != 3:
            raise ValueError("Token structure invalid")

        header_segment, payload_segment, signature_segment = parts
        signing_input = f"{header_segment}.{payload_segment}".encode("ascii")
        try:
            provided_signature = _b64decode(signature_segment)
        except (ValueError, TypeError) as exc:
            raise ValueError("Token structure invalid") from exc
        if not hmac.compare_digest(provided_signature, self._signature(signing_input)):
            raise ValueError("Token signature mismatch")

        try:
            header = json.loads(_b64decode(header_segment))
            payload_data = json.loads(_b64decode(payload_segment))
        except (ValueError, TypeError) as exc:
            raise ValueError("Token payload malformed") from exc

        if header.get("alg") != self._algorithm:
            raise ValueError("Token algorithm mismatch")

        exp = payload_data.get("exp")
        if exp is None:
            raise ValueError("Token missing expiration")
        now_ts = int(datetime.now(timezone.utc).timestamp())
        if now_ts >= int(exp):
            raise ValueError("Token expired")

        return payload_data
