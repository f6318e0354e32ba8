from sqlalchemy import Column, Integer, String, Float, DateTime, Boolean
from datetime import datetime
from .database import Base
import enum


class MaterialKind(str, enum.Enum):
    CEMENT = "cement"
    SAND = "sand"
    BALLAST = "ballast"
    BLOCK = "block"
    EXCAVATION = "excavation"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


class User(Base):
    """One row per email that has logged in."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    subscription_active = Column(Boolean, default=False)
    subscription_expires = Column(DateTime, nullable=True)
    calculations_used = Column(Integer, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def has_active_subscription(self, now: datetime = None) -> bool:
        if not self.subscription_active:
            return False
        if self.subscription_expires is None:
            return True
        return self.subscription_expires > (now or datetime.utcnow())


class MaterialPrice(Base):
    """Catalog row — price and purchase-unit factor per material kind."""
    __tablename__ = "material_prices"

    id = Column(Integer, primary_key=True, index=True)
    kind = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    unit = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    factor = Column(Float, default=1.0)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Payment(Base):
    """Paystack transaction started from /paystack/initialize."""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    reference = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, nullable=False, index=True)
    amount = Column(Float, nullable=False)  # major currency unit (KES, not cents)
    status = Column(String, default=PaymentStatus.PENDING.value)
    created_at = Column(DateTime, default=datetime.utcnow)
    verified_at = Column(DateTime, nullable=True)
