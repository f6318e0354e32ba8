from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from .config import settings
from .database import engine, Base
from .errors import CalculatorError, QuotaExceededError
from .routers import auth, calculations, materials, payments

logger = logging.getLogger("construction_calc")

# Create tables (handles new tables but won't add columns to existing ones)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Construction Cost Calculator",
    description="Material quantity and cost estimates for excavation, walling, concrete and plaster",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(auth.router, prefix="/api")
app.include_router(calculations.router, prefix="/api")
app.include_router(materials.router, prefix="/api")
app.include_router(payments.router, prefix="/api")


@app.exception_handler(QuotaExceededError)
async def quota_exceeded_handler(request: Request, exc: QuotaExceededError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(CalculatorError)
async def calculator_error_handler(request: Request, exc: CalculatorError):
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
def health():
    return {"status": "ok", "app": "construction-calc"}


@app.on_event("startup")
def auto_seed():
    """Auto-seed material prices on first run."""
    from .database import SessionLocal
    db = SessionLocal()
    try:
        seeded = materials.seed_default_prices(db)
        if seeded:
            logger.info("Seeded %d default material prices", seeded)
    finally:
        db.close()
    logger.info("%s ready, free limit %d", settings.APP_NAME, settings.FREE_LIMIT)
