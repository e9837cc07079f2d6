"""
Bearer-token authentication for FastAPI.
Validates JWTs from the identity provider and extracts the user identity.
"""

from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from translationflow.config import Settings
from translationflow.utils.logging import get_logger

logger = get_logger(__name__)

# HTTP Bearer token extraction
security = HTTPBearer(auto_error=False)


class AuthenticatedUser:
    """Represents an authenticated user; ``user_id`` is an opaque ownership key."""

    def __init__(self, user_id: str, email: Optional[str] = None):
        self.user_id = user_id
        self.email = email


def decode_token(token: str, settings: Settings) -> dict:
    """
    Decode a JWT into its claims.

    The signature is verified when ``auth_jwt_secret`` is configured;
    without it claims are read unverified, which is only meant for local
    development.
    """
    if not settings.auth_jwt_secret:
        return jwt.decode(token, options={"verify_signature": False})

    options = {"verify_aud": bool(settings.auth_jwt_audience)}
    return jwt.decode(
        token,
        settings.auth_jwt_secret,
        algorithms=[settings.auth_jwt_algorithm],
        audience=settings.auth_jwt_audience or None,
        options=options,
    )


def get_app_settings(request: Request) -> Settings:
    """Settings of the running application."""
    return request.app.state.settings


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    settings: Settings = Depends(get_app_settings),
) -> AuthenticatedUser:
    """
    Dependency to validate the bearer token and extract user info.

    Raises HTTPException 401 if token is invalid or missing.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = decode_token(credentials.credentials, settings)
    except jwt.PyJWTError as e:
        logger.warning("Token validation failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = claims.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing user ID",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.debug("User authenticated", user_id=user_id)
    return AuthenticatedUser(user_id=str(user_id), email=claims.get("email"))
