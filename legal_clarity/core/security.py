"""Authentication with bearer JWTs"""
from typing import Optional
from datetime import datetime, timedelta, timezone
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt

from ..config import (
    JWT_SECRET_KEY, JWT_ALGORITHM, JWT_AUDIENCE, JWT_ISSUER, ACCESS_TOKEN_EXPIRE_MINUTES
)
from ..models import User
from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

UNAUTHENTICATED_MESSAGE = "User not authenticated. Please sign in again."

security = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode["exp"] = expire
    if JWT_AUDIENCE:
        to_encode.setdefault("aud", JWT_AUDIENCE)
    if JWT_ISSUER:
        to_encode.setdefault("iss", JWT_ISSUER)
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> Optional[str]:
    """Verify and decode a JWT token; returns the subject or None"""
    try:
        payload = jwt.decode(
            token,
            JWT_SECRET_KEY,
            algorithms=[JWT_ALGORITHM],
            audience=JWT_AUDIENCE,
            issuer=JWT_ISSUER,
            options={"verify_aud": bool(JWT_AUDIENCE)},
        )
    except JWTError as e:
        logger.debug(f"JWT verification failed: {e}")
        return None
    user_id = payload.get("sub")
    if not user_id or not isinstance(user_id, str):
        return None
    return user_id


def resolve_user_id(token: Optional[str]) -> str:
    """
    Resolve the caller's identity from a bearer token.

    Every failure (missing, malformed, expired, bad signature, no subject)
    raises the same AuthenticationError.
    """
    if not token:
        raise AuthenticationError(UNAUTHENTICATED_MESSAGE)
    user_id = verify_token(token)
    if user_id is None:
        logger.warning(f"❌ Invalid authentication token: {token[:10]}...")
        raise AuthenticationError(UNAUTHENTICATED_MESSAGE)
    return user_id


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> User:
    """FastAPI dependency: the authenticated user, or 401"""
    token = credentials.credentials if credentials else None
    try:
        user_id = resolve_user_id(token)
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    return User(user_id=user_id)
