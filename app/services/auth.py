"""Verification of access tokens issued by the external auth provider."""

from typing import Any, Dict, Optional
from uuid import UUID

import jwt
import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import settings
from app.exceptions import AuthenticationError

logger = structlog.get_logger()

# Security scheme for JWT Bearer token. Missing credentials are reported as
# 401 by get_current_user rather than FastAPI's default response.
security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a JWT access token.

    Args:
        token: JWT token string

    Returns:
        Dict containing the decoded token payload

    Raises:
        AuthenticationError: If token is invalid or expired
    """
    try:
        return jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        logger.info("Rejected access token", reason=str(e))
        raise AuthenticationError("Invalid token")


def user_from_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Build the caller identity from a decoded token payload."""
    subject = payload.get("sub")
    if not subject:
        raise AuthenticationError("Invalid token payload")
    try:
        user_id = UUID(str(subject))
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    return {"id": user_id, "email": payload.get("email")}


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """
    Resolve the authenticated caller from the Bearer token.
    This function is used as a dependency for protected routes.

    Args:
        credentials: HTTP Authorization credentials

    Returns:
        Dict with the caller's ``id`` (UUID) and ``email``

    Raises:
        AuthenticationError: If the token is missing or invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required")

    return user_from_payload(decode_token(credentials.credentials))
