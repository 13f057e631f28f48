"""Property Catalog — FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError

from app.api.v1.properties import router as properties_router
from app.config import settings
from app.database import close_db, init_db
from app.exceptions import PropertyNotFoundError, PropertyValidationError

# Configure root logger so all app.* loggers output to stderr.
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup and shutdown events."""
    # Startup
    await init_db()
    yield
    # Shutdown — dispose engine connections
    await close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Catalog of real-estate listings and their images.",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PropertyNotFoundError)
async def property_not_found_handler(request: Request, exc: PropertyNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Property not found"})


@app.exception_handler(PropertyValidationError)
async def property_validation_handler(request: Request, exc: PropertyValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors)})


@app.exception_handler(DBAPIError)
async def storage_failure_handler(request: Request, exc: DBAPIError) -> JSONResponse:
    """Hide driver messages and SQL text; the caller may retry."""
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, type(exc.orig).__name__)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": "Storage temporarily unavailable, please retry"},
    )


# Routers
app.include_router(properties_router)


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "service": settings.app_name}


@app.get("/", tags=["root"])
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
