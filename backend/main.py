"""
LiftLens FastAPI application.

Main application entry point with route registration, CORS and rate limiting.
"""
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text

from backend.config import settings
from backend.api.routes import auth, equipment, features, locations, routines
from backend.db.database import SessionLocal
from backend.errors import InvalidArgumentError

# Configure logging with configurable level
_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
logging.basicConfig(
    level=_log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    if not settings.openai_api_key:
        logger.warning("OPENAI_API_KEY is not set; equipment detection and routine generation will fail")

    yield

    logger.info("Shutting down application...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Gym equipment detection and workout routine generation API",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Rate limiter lives on the auth router; expose it to slowapi via app state
app.state.limiter = auth.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report request schema violations as VALIDATION_INVALID_ARGUMENT."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ())[1:]]
    field = ".".join(loc) or "body"

    if first.get("type") == "missing":
        error = InvalidArgumentError(field)
    else:
        error = InvalidArgumentError(field, first.get("msg") or "Invalid request")
    error.details["errors"] = jsonable_encoder(errors)

    logger.info(f"Rejected {request.method} {request.url.path}: {error.message}")
    return JSONResponse(status_code=error.status_code, content={"detail": error.to_detail()})


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(auth.router)
app.include_router(locations.router)
app.include_router(equipment.router)
app.include_router(routines.router)
app.include_router(features.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint with database connectivity test."""
    db_status = "healthy"
    db_error = None

    try:
        db = SessionLocal()
        db.execute(text("SELECT 1"))
        db.close()
    except Exception as e:
        db_status = "unhealthy"
        db_error = str(e)

    response = {
        "status": db_status,
        "version": settings.app_version,
        "database": db_status,
        "model_configured": bool(settings.openai_api_key),
    }

    if db_error:
        response["database_error"] = db_error

    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "backend.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
