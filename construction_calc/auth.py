"""
JWT token creation/validation and identity dependencies.

Libraries: python-jose[cryptography] for JWT.

Identity is the user's email, or "guest" for anonymous callers. Requests
without a bearer token count against the shared guest quota.
"""

from datetime import datetime, timedelta

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .usage import GUEST_IDENTITY
from . import models

security = HTTPBearer(auto_error=False)


def _get_jwt_secret() -> str:
    """Get JWT secret, failing loudly if not configured."""
    secret = settings.JWT_SECRET
    if not secret:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="JWT_SECRET not configured — set it in environment variables",
        )
    return secret


def create_access_token(identity: str) -> str:
    """Create an access token whose subject is an email or "guest"."""
    expire = datetime.utcnow() + timedelta(minutes=settings.JWT_ACCESS_EXPIRE_MINUTES)
    payload = {
        "sub": identity,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(payload, _get_jwt_secret(), algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Decode and validate a JWT. Raises HTTPException on failure."""
    try:
        return jwt.decode(token, _get_jwt_secret(), algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )


def get_identity(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """FastAPI dependency — email from the bearer token, or "guest" without one."""
    if credentials is None:
        return GUEST_IDENTITY

    payload = decode_token(credentials.credentials)
    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type — use an access token",
        )

    identity = payload.get("sub")
    if not identity:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token payload",
        )
    return identity


def get_optional_user(
    identity: str = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """User row for a logged-in identity, None for guests."""
    if identity == GUEST_IDENTITY:
        return None
    return db.query(models.User).filter(models.User.email == identity).first()


def get_current_user(
    identity: str = Depends(get_identity),
    user=Depends(get_optional_user),
) -> models.User:
    """FastAPI dependency — requires a logged-in (non-guest) user."""
    if identity == GUEST_IDENTITY:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user
