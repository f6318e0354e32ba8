"""
Auth endpoints — email login, guest token, current identity.

Login is email-only: the address is checked (format, disposable and
placeholder domains), a User row is created on first login, and an
access token carrying the email is returned.
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import create_access_token, get_identity, get_optional_user
from ..database import get_db
from ..email_validation import validate_email
from ..usage import GUEST_IDENTITY, limiter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _identity_response(identity: str, user) -> dict:
    return {
        "identity": identity,
        "is_guest": identity == GUEST_IDENTITY,
        "subscription_active": bool(user and user.has_active_subscription()),
        "subscription_expires": user.subscription_expires.isoformat() if user and user.subscription_expires else None,
        "calculations_used": limiter.usage(identity),
        "free_limit": limiter.limit,
        "free_remaining": limiter.remaining(identity),
    }


@router.post("/login")
def login(request: schemas.LoginRequest, db: Session = Depends(get_db)):
    """Validate the email, create the user on first login, return a token."""
    email = validate_email(request.email)

    user = db.query(models.User).filter(models.User.email == email).first()
    created = user is None
    if created:
        user = models.User(email=email)
        db.add(user)
        db.commit()
        db.refresh(user)
    logger.info("User logged in: %s%s", email, " (new)" if created else "")

    return {
        "access_token": create_access_token(email),
        "token_type": "bearer",
        "created": created,
        "user": _identity_response(email, user),
    }


@router.post("/guest")
def guest():
    """Token for the shared guest identity — same quota as no token at all."""
    return {
        "access_token": create_access_token(GUEST_IDENTITY),
        "token_type": "bearer",
        "user": _identity_response(GUEST_IDENTITY, None),
    }


@router.get("/me")
def me(identity: str = Depends(get_identity), user=Depends(get_optional_user)):
    """Return the caller's identity, subscription and usage."""
    return _identity_response(identity, user)
