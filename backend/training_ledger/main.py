"""
Training Ledger API - Main Application Entry Point

Registry and slot-booking ledger for a disaster-recovery training program:
- Admin, trainer and participant registration
- 48 half-hour slots per trainer, booked at most once each
- Fixed booking fee credited to a pseudo-randomly drawn admin
- All-or-nothing bookings serialized through one ledger lock
- Structured logging with request correlation
"""

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from training_ledger.core.config import get_settings
from training_ledger.core.exceptions import LedgerError
from training_ledger.core.logging import setup_logging, get_logger
from training_ledger.core.metrics import metrics_endpoint
from training_ledger.api.router import api_router
from training_ledger.api.middleware import RequestLoggingMiddleware
from training_ledger.db.session import Ledger
from training_ledger.services.entropy_factory import get_entropy_source
from training_ledger.services.cache_service import ScheduleCache, connect_redis, get_schedule_cache

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle: the ledger lives exactly as long as the app."""
    setup_logging()

    logger.info(
        "application_starting",
        app=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
        entropy_source=settings.ENTROPY_SOURCE,
    )

    ledger = Ledger()
    await ledger.create_all()
    app.state.ledger = ledger
    app.state.entropy = get_entropy_source()

    redis_client = await connect_redis()
    if redis_client:
        logger.info("redis_ready", namespace=ledger.instance_id)
    elif settings.REDIS_ENABLED:
        logger.warning("redis_unavailable", message="Running without schedule cache")
    cache = ScheduleCache(redis_client, namespace=ledger.instance_id)
    app.state.schedule_cache = cache

    yield

    # Cached schedules die with the ledger they describe
    await cache.clear()
    await cache.close()
    await ledger.dispose()
    logger.info("application_shutdown")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Registry and slot-booking ledger for disaster-recovery training",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router)


@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.info("request_rejected", error=exc.code, detail=exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.detail},
    )


@app.get("/health", tags=["Health"])
async def health_check(cache: ScheduleCache = Depends(get_schedule_cache)):
    """Health check endpoint for Docker and load balancers."""
    cache_stats = await cache.stats()
    return {
        "status": "healthy",
        "version": settings.APP_VERSION,
        "environment": settings.ENVIRONMENT,
        "cache": cache_stats,
    }


@app.get("/metrics", tags=["Health"], include_in_schema=False)
def metrics():
    return metrics_endpoint()


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/docs",
    }
