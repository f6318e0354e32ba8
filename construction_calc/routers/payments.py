"""
Payment endpoints — Paystack subscription flow and user status.

POST /api/paystack/initialize         — start a payment, returns authorization_url
GET  /api/paystack/verify/{reference} — confirm payment, activate subscription, reset quota
GET  /api/user/status?email=          — subscription and usage for an email
"""

import logging
import math
from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import models, schemas
from ..auth import get_identity
from ..config import settings
from ..database import get_db
from ..email_validation import normalize_email
from ..payments import PaystackClient
from ..usage import GUEST_IDENTITY, limiter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payments"])


def get_paystack() -> PaystackClient:
    """FastAPI dependency, overridden in tests."""
    return PaystackClient()


def activate_subscription(db: Session, email: str, now: datetime = None) -> models.User:
    """Mark the user subscribed for SUBSCRIPTION_DAYS and reset their free quota."""
    now = now or datetime.utcnow()
    user = db.query(models.User).filter(models.User.email == email).first()
    if user is None:
        user = models.User(email=email)
        db.add(user)

    start = user.subscription_expires if user.has_active_subscription(now) else now
    user.subscription_active = True
    user.subscription_expires = start + timedelta(days=settings.SUBSCRIPTION_DAYS)
    user.calculations_used = 0
    db.commit()
    db.refresh(user)

    limiter.reset(email)
    logger.info("Subscription active for %s until %s", email, user.subscription_expires.isoformat())
    return user


def claim_payment(db: Session, reference: str, status: str, only_from: tuple) -> bool:
    """
    Move a payment to `status` if it is currently in one of `only_from`.
    Conditional UPDATE, so of two concurrent verifies only one claims the row.
    """
    claimed = db.query(models.Payment).filter(
        models.Payment.reference == reference,
        models.Payment.status.in_(only_from),
    ).update(
        {"status": status, "verified_at": datetime.utcnow()},
        synchronize_session=False,
    )
    db.commit()
    return claimed == 1


def _payment_mismatch(payment: models.Payment, result: dict) -> str:
    """Reason the gateway record does not cover this payment, or "" if it does."""
    if (result.get("amount") or 0) < payment.amount:
        return "Amount paid is less than the amount requested"
    if normalize_email(result.get("email")) != payment.email:
        return "Payment email does not match the account"
    return ""


@router.post("/paystack/initialize")
def initialize_payment(
    request: schemas.PaymentInitRequest,
    identity: str = Depends(get_identity),
    paystack: PaystackClient = Depends(get_paystack),
    db: Session = Depends(get_db),
):
    email = normalize_email(request.email) or identity
    if not email or email == GUEST_IDENTITY:
        raise HTTPException(status_code=400, detail="Log in with an email before paying")
    if not math.isfinite(request.amount) or request.amount < settings.SUBSCRIPTION_PRICE:
        raise HTTPException(
            status_code=422,
            detail=f"Minimum amount is {settings.SUBSCRIPTION_PRICE:g} {settings.CURRENCY}",
        )

    data = paystack.initialize_transaction(email, request.amount)

    db.add(models.Payment(reference=data["reference"], email=email, amount=request.amount))
    db.commit()
    return data


@router.get("/paystack/verify/{reference}")
def verify_payment(
    reference: str,
    paystack: PaystackClient = Depends(get_paystack),
    db: Session = Depends(get_db),
):
    payment = db.query(models.Payment).filter(models.Payment.reference == reference).first()
    if not payment:
        raise HTTPException(status_code=404, detail="Payment not found")

    if payment.status == models.PaymentStatus.SUCCESS.value:
        return _already_verified(db, payment)

    result = paystack.verify_transaction(reference)
    pending = (models.PaymentStatus.PENDING.value,)

    if result.get("status") != "success":
        claim_payment(db, reference, models.PaymentStatus.FAILED.value, pending)
        logger.warning("Payment %s not successful: %s", reference, result.get("status"))
        return {"status": models.PaymentStatus.FAILED.value, "gateway_status": result.get("status")}

    mismatch = _payment_mismatch(payment, result)
    if mismatch:
        claim_payment(db, reference, models.PaymentStatus.FAILED.value, pending)
        logger.warning("Payment %s rejected: %s (gateway amount %s, email %s)",
                       reference, mismatch, result.get("amount"), result.get("email"))
        return {"status": models.PaymentStatus.FAILED.value, "detail": mismatch}

    not_success = (models.PaymentStatus.PENDING.value, models.PaymentStatus.FAILED.value)
    if not claim_payment(db, reference, models.PaymentStatus.SUCCESS.value, not_success):
        # Another request verified it first
        return _already_verified(db, payment)

    user = activate_subscription(db, payment.email)
    return {
        "status": models.PaymentStatus.SUCCESS.value,
        "email": user.email,
        "subscription_active": True,
        "subscription_expires": user.subscription_expires.isoformat(),
    }


def _already_verified(db: Session, payment: models.Payment) -> dict:
    user = db.query(models.User).filter(models.User.email == payment.email).first()
    return {"status": models.PaymentStatus.SUCCESS.value, "already_verified": True,
            "subscription_expires": user.subscription_expires.isoformat() if user and user.subscription_expires else None}


@router.get("/user/status", response_model=schemas.UserStatus)
def user_status(email: str, db: Session = Depends(get_db)):
    email = normalize_email(email)
    if not email:
        raise HTTPException(status_code=400, detail="Email required")

    user = db.query(models.User).filter(models.User.email == email).first()
    if not user:
        return {"email": email, "free_remaining": limiter.remaining(email)}

    return {
        "email": user.email,
        "subscription_active": user.has_active_subscription(),
        "subscription_expires": user.subscription_expires,
        "calculations_used": user.calculations_used or 0,
        "free_remaining": limiter.remaining(email),
    }
