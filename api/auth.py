"""
Bearer-token authentication for the FastAPI routes.
"""

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.auth.tokens import TokenService, get_token_service
from core.exceptions import InvalidTokenError

logger = structlog.get_logger(__name__)

# auto_error=False so missing credentials become 401 rather than 403
security = HTTPBearer(auto_error=False)


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    tokens: TokenService = Depends(get_token_service),
) -> str:
    """
    Verify the bearer token on the request.

    Args:
        credentials: Parsed ``Authorization: Bearer`` header, if any
        tokens: Token service used to check the signature and claims

    Returns:
        The token subject (username)

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        logger.warning("Request without bearer token")
        raise unauthorized("Not authenticated")

    try:
        claims = tokens.decode(credentials.credentials)
    except InvalidTokenError as exc:
        logger.warning("Rejected bearer token", reason=str(exc))
        raise unauthorized("Invalid or expired token")

    subject = claims["sub"]
    structlog.contextvars.bind_contextvars(user=subject)
    return subject
