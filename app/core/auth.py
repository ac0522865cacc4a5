"""
Authentication Utility - JWT bearer verification.

Provides:
- JWT token creation/verification
- FastAPI dependencies for protected and optionally-authenticated routes

Authorization (who may do what) is not decided here; see
app.services.access_control.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import get_settings
from app.core.errors import AuthenticationError
from app.models import CurrentUser

logger = logging.getLogger(__name__)

# Bearer token extractor (errors are raised by us, not by HTTPBearer)
bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(uid: str, email: str = None, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode = {"sub": uid, "exp": expire}
    if email:
        to_encode["email"] = email
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def verify_token(token: str) -> CurrentUser:
    """Resolve a bearer token to {uid, email} or raise AuthenticationError."""
    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")
    return CurrentUser(uid=str(payload["sub"]), email=payload.get("email"))


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: CurrentUser = Depends(get_current_user)):
            return user.uid
    """
    if credentials is None:
        raise AuthenticationError("Missing bearer token")
    return verify_token(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[CurrentUser]:
    """Dependency for public routes: None when no (or an invalid) token is sent."""
    if credentials is None:
        return None
    try:
        return verify_token(credentials.credentials)
    except AuthenticationError:
        logger.warning("Ignoring invalid bearer token on public route")
        return None
