"""
Calculation endpoints.

POST /api/calculate/{work_type} — run a calculator; counts against the free limit
POST /api/blocks/work           — block geometry for a size, quantity and price
GET  /api/calculate/            — list available work types

Inputs are validated before the quota is touched, so a rejected form
never costs the user a free calculation.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..auth import get_identity, get_optional_user
from ..calculators.catalog import MaterialCatalog
from ..calculators.materials import compute_block_work
from ..calculators.registry import get_calculator, has_calculator, list_calculators
from ..database import get_db
from ..models import MaterialKind
from ..usage import limiter
from .materials import get_catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculations"])


def consume_calculation(identity: str, user, db: Session) -> dict:
    """
    Gate one calculation. Active subscribers are not counted against the
    limiter; everyone else goes through check_and_consume.
    """
    subscribed = bool(user and user.has_active_subscription())
    if subscribed:
        used = limiter.usage(identity)
    else:
        used = limiter.check_and_consume(identity)

    if user is not None:
        user.calculations_used = (user.calculations_used or 0) + 1
        db.commit()

    return {
        "identity": identity,
        "subscribed": subscribed,
        "used": used,
        "limit": limiter.limit,
        "remaining": None if subscribed else max(limiter.limit - used, 0),
    }


@router.get("/calculate/")
def available_work_types():
    return {"work_types": list_calculators()}


@router.post("/calculate/{work_type}")
def calculate(
    work_type: str,
    request: schemas.CalculationRequest,
    identity: str = Depends(get_identity),
    user=Depends(get_optional_user),
    catalog: MaterialCatalog = Depends(get_catalog),
    db: Session = Depends(get_db),
):
    if not has_calculator(work_type):
        raise HTTPException(status_code=404, detail=f"Unknown work type: {work_type}")

    result = get_calculator(work_type, catalog).calculate(request.fields)
    usage = consume_calculation(identity, user, db)
    logger.info("%s calculation for %s — %d items", work_type, identity, len(result["items"]))
    return {**result, "usage": usage}


@router.post("/blocks/work")
def block_work(
    request: schemas.BlockWorkRequest,
    catalog: MaterialCatalog = Depends(get_catalog),
):
    price = request.price if request.price is not None else catalog.get(MaterialKind.BLOCK).price
    return compute_block_work(request.quantity, price, request.size)
