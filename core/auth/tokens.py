"""JWT issuance and verification.

Tokens are signed with a symmetric key and carry the standard registered
claims: ``iss``, ``aud``, ``sub``, ``iat`` and ``exp``. Expiry is always
``iat`` plus the configured lifetime.
"""

import time
from typing import Any

import jwt

from core.config import AuthConfig, settings
from core.exceptions import InvalidTokenError


class TokenService:
    """Issue and decode signed access tokens."""

    def __init__(
        self,
        key: str,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
        ttl_seconds: int = 3600,
    ):
        if not key:
            raise ValueError("JWT signing key not configured")
        self.key = key
        self.issuer = issuer
        self.audience = audience
        self.algorithm = algorithm
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_config(cls, config: AuthConfig) -> "TokenService":
        return cls(
            key=config.jwt_key,
            issuer=config.jwt_issuer,
            audience=config.jwt_audience,
            algorithm=config.jwt_algorithm,
            ttl_seconds=config.token_ttl_seconds,
        )

    def issue(self, subject: str, now: int | None = None) -> str:
        """Return a signed token for ``subject`` valid for ``ttl_seconds``."""
        issued_at = int(time.time()) if now is None else now
        payload = {
            "iss": self.issuer,
            "aud": self.audience,
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
        }
        return jwt.encode(payload, self.key, algorithm=self.algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        """Verify signature, issuer, audience and expiry; return the claims.

        Raises:
            InvalidTokenError: If any check fails.
        """
        try:
            return jwt.decode(
                token,
                self.key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(str(exc)) from exc


_token_service: TokenService | None = None


def get_token_service() -> TokenService:
    """FastAPI dependency returning the process-wide token service."""
    global _token_service
    if _token_service is None:
        _token_service = TokenService.from_config(settings.auth)
    return _token_service
