"""FastAPI application entry point with lifespan management."""

from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from freefile import __version__
from freefile.api.health import router as health_router
from freefile.api.matching import router as matching_router
from freefile.api.middleware import RequestContextMiddleware
from freefile.api.offers import router as offers_router
from freefile.api.tax import router as tax_router
from freefile.core.config import settings
from freefile.core.logging import configure_logging, get_logger
from freefile.matching.catalog import load_default_catalog

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle resources.

    Startup:
        - Configure structured logging
        - Load and validate the offer catalog

    A broken catalog file fails startup instead of the first request.
    """
    # Configure logging first
    configure_logging()
    logger.info("Starting application", environment=settings.environment)

    app.state.offers = load_default_catalog()

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title="Free File Navigator",
    description="Free File offer matching and federal tax estimates",
    version=__version__,
    lifespan=lifespan,
)

# Add CORS middleware for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request context middleware
app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health_router)
app.include_router(offers_router)
app.include_router(matching_router)
app.include_router(tax_router)
