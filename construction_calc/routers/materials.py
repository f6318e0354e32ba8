from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from .. import models, schemas
from ..calculators.catalog import DEFAULT_PRICES, MaterialCatalog
from ..database import get_db

router = APIRouter(prefix="/materials", tags=["materials"])


def seed_default_prices(db: Session) -> int:
    """Insert DEFAULT_PRICES rows that are missing. Safe to run multiple times."""
    seeded = 0
    for kind, price_data in DEFAULT_PRICES.items():
        existing = db.query(models.MaterialPrice).filter(models.MaterialPrice.kind == kind.value).first()
        if not existing:
            db.add(models.MaterialPrice(kind=kind.value, **price_data))
            seeded += 1
    db.commit()
    return seeded


def get_catalog(db: Session = Depends(get_db)) -> MaterialCatalog:
    """FastAPI dependency — catalog from the database, defaults for missing kinds."""
    return MaterialCatalog.from_rows(db.query(models.MaterialPrice).all())


@router.get("/seed")
def seed_prices(db: Session = Depends(get_db)):
    """Seed default material prices."""
    seeded = seed_default_prices(db)
    return {"ok": True, "seeded": seeded}


@router.get("/", response_model=List[schemas.MaterialPrice])
def list_prices(db: Session = Depends(get_db)):
    return db.query(models.MaterialPrice).order_by(models.MaterialPrice.id).all()


@router.patch("/{kind}", response_model=schemas.MaterialPrice)
def update_price(kind: models.MaterialKind, update: schemas.MaterialPriceUpdate, db: Session = Depends(get_db)):
    price = db.query(models.MaterialPrice).filter(models.MaterialPrice.kind == kind.value).first()
    if not price:
        raise HTTPException(status_code=404, detail="Material not found — run /materials/seed first")
    changes = update.model_dump(exclude_unset=True)
    for field in ("price", "factor"):
        if changes.get(field) is not None and changes[field] < 0:
            raise HTTPException(status_code=422, detail=f"{field} cannot be negative")
    for field, value in changes.items():
        if value is not None:
            setattr(price, field, value)
    db.commit()
    db.refresh(price)
    return price
