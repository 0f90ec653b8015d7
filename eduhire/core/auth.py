"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt (fixed cost factor)
- JWT token creation/verification (fixed 5-day expiry)
- FastAPI dependencies for protected routes (the auth gateway)
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyHeader, HTTPBearer, HTTPAuthorizationCredentials

from eduhire.core.config import get_settings
from eduhire.core.errors import UnauthorizedError

settings = get_settings()
logger = logging.getLogger(__name__)

# Password hashing
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)

# Token extractors: custom header first, standard bearer as fallback
token_header = APIKeyHeader(name=settings.auth_header_name, auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token bound to a user id."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=settings.jwt_expire_days))
    to_encode = {"sub": str(user_id), "user": {"id": str(user_id)}, "exp": expire}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token. Expired or tampered tokens give None."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def verify_token(token: Optional[str]) -> str:
    """
    Validate signature and expiry, return the identity (user id).

    Raises:
        UnauthorizedError if the token is missing, invalid or expired
    """
    if not token:
        raise UnauthorizedError("No token, authorization denied")

    payload = decode_token(token)
    if not payload:
        raise UnauthorizedError()

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError()
    return user_id


async def get_request_token(
    header_token: Optional[str] = Depends(token_header),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    """Pull the raw token out of the request headers, if any."""
    if header_token:
        return header_token
    if credentials:
        return credentials.credentials
    return None


async def get_current_identity(request: Request, token: Optional[str] = Depends(get_request_token)) -> str:
    """
    FastAPI dependency - the auth gateway.

    Verifies the token and attaches the identity to request.state.

    Usage:
        @router.get("/protected")
        async def route(identity: str = Depends(get_current_identity)):
            ...
    """
    try:
        identity = verify_token(token)
    except UnauthorizedError as e:
        logger.info("Rejected request to %s: %s", request.url.path, e.message)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
            headers={"WWW-Authenticate": "Bearer"},
        )

    request.state.identity = identity
    return identity


async def get_optional_identity(token: Optional[str] = Depends(get_request_token)) -> Optional[str]:
    """Dependency - identity if a valid token was sent, else None."""
    try:
        return verify_token(token)
    except UnauthorizedError:
        return None
