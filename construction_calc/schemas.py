from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from .models import MaterialKind


class MaterialPriceBase(BaseModel):
    kind: MaterialKind
    name: str
    unit: str
    price: float
    factor: float = 1.0


class MaterialPriceUpdate(BaseModel):
    name: Optional[str] = None
    unit: Optional[str] = None
    price: Optional[float] = None
    factor: Optional[float] = None


class MaterialPrice(MaterialPriceBase):
    id: int
    updated_at: datetime
    class Config:
        from_attributes = True


class CalculationRequest(BaseModel):
    fields: dict  # {field_id: value, ...} — parsed by the calculator


class BlockWorkRequest(BaseModel):
    size: str
    quantity: float = 1
    price: Optional[float] = None  # catalog price when omitted


class LoginRequest(BaseModel):
    email: str


class PaymentInitRequest(BaseModel):
    amount: float
    email: Optional[str] = None


class UserStatus(BaseModel):
    email: str
    subscription_active: bool = False
    subscription_expires: Optional[datetime] = None
    calculations_used: int = 0
    free_remaining: int = 0
