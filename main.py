# main.py
"""
Lunchbox API - Main Application.

FastAPI app for daily lunch ordering: menu curation, personal plans and
kitchen roll-ups over a SQLAlchemy-backed store.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from settings import settings
from app.database import init_db, ping
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.schemas.common import format_validation_errors
from app.utils.errors import LunchboxException

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

# Import routers
from app.routes import (
    auth,
    menu,
    daily_menu,
    plan,
    kitchen,
    profile,
    admin,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Lunchbox API...")
    if settings.AUTO_CREATE_TABLES:
        try:
            init_db()
        except Exception as e:
            logger.warning(f"Failed to initialize database at startup: {e}")

    yield

    logger.info("Lunchbox API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Lunchbox API",
    version="1.0.0",
    description="Staff lunch ordering: menus, daily options, plans and kitchen summaries",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)


# Error handlers: every failure leaves as {"error": "..."}
@app.exception_handler(LunchboxException)
async def lunchbox_exception_handler(request: Request, exc: LunchboxException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"error": format_validation_errors(exc.errors())})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.error(f"Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(status_code=400, content={"error": str(exc.orig)})


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"Database error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": f"Database error: {exc}"})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint - fast response without database dependency."""
    return {
        "status": "ok",
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0"
    }


@app.get("/health/detailed")
def health_check_detailed():
    """Detailed health check with database connectivity test."""
    db_ok = ping()
    return {
        "status": "ok" if db_ok else "degraded",
        "database_connected": db_ok,
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": "1.0.0"
    }


# Include routers
app.include_router(auth.router, tags=["Authentication"])
app.include_router(menu.router, prefix="/menu", tags=["Menu"])
app.include_router(daily_menu.router, prefix="/daily-menu", tags=["Daily Menu"])
app.include_router(plan.router, prefix="/plan", tags=["Plan"])
app.include_router(kitchen.router, prefix="/kitchen-week", tags=["Kitchen"])
app.include_router(profile.router, prefix="/profile", tags=["Profile"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


# Root endpoint
@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Lunchbox API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
