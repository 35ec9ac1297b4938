"""
Nearby Convenience API - Main Application Entry Point.

Finds places of interest (hospitals, pharmacies, restaurants, ...) around a
location via Google Maps and computes a normalized "Convenience Score" (0-10)
describing how well-served the area is.

Run with: uvicorn main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError

from app import __version__
from app.clients.places_client import PlacesAPIError, get_places_client
from app.config import get_settings
from app.models import HealthResponse
from app.routes import places_router, scoring_router
from app.middleware.error_handler import (
    APIError,
    ErrorHandlerMiddleware,
    create_api_error_handler,
    create_http_exception_handler,
    create_places_error_handler,
    create_scoring_error_handler,
    create_validation_error_handler,
)
from app.middleware.request_logging import RequestLoggingMiddleware
from app.services.exceptions import ScoringError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Global state
_settings = get_settings()
_start_time: float = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    - Startup: record start time, warn if Google Maps is not configured
    - Shutdown: close the Google Maps HTTP client
    """
    global _start_time

    # === STARTUP ===
    logger.info("Starting Nearby Convenience API...")
    _start_time = time.time()

    places_client = get_places_client()
    if not places_client.is_configured:
        logger.warning("GOOGLE_MAPS_API_KEY not set; place search endpoints will fail")

    logger.info(f"API v{__version__} ready")

    yield  # Application runs here

    # === SHUTDOWN ===
    logger.info("Shutting down...")

    await places_client.close()
    logger.info("Places client closed")

    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Nearby Convenience API",
    description="""
## Neighborhood Convenience Scoring

Finds places of interest around a location and computes a **Convenience Score** (0-10).

### Data Sources
- **Google Places Nearby Search**: places by type or keyword
- **Google Geocoding**: address to coordinates

### Scoring Algorithm
For the searched category:
- **40%**: Average proximity (full credit within a third of the category radius)
- **40%**: Density relative to the category's ideal count
- **20%**: Variety of place types found
- Scaled by category importance, rounded to one decimal, capped at 10
    """,
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add custom middleware (order matters - first added = outermost)
app.add_middleware(RequestLoggingMiddleware)  # Log all requests
app.add_middleware(ErrorHandlerMiddleware)

# Add exception handlers for consistent error format
app.add_exception_handler(RequestValidationError, create_validation_error_handler())
app.add_exception_handler(HTTPException, create_http_exception_handler())
app.add_exception_handler(APIError, create_api_error_handler())
app.add_exception_handler(ScoringError, create_scoring_error_handler())
app.add_exception_handler(PlacesAPIError, create_places_error_handler())

# Include routers
app.include_router(places_router)
app.include_router(scoring_router)


@app.get(
    "/",
    tags=["root"],
    summary="API Root",
    description="Welcome message and API information.",
)
async def root():
    """API root endpoint."""
    return {
        "name": _settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "endpoints": {
            "nearby": "GET /nearby",
            "geocode": "GET /geocode",
            "score": "POST /score",
            "profiles": "GET /profiles",
            "health": "GET /health",
        },
    }


@app.get(
    "/health",
    tags=["health"],
    response_model=HealthResponse,
    summary="Health Check",
    description="Service status and whether Google Maps is configured.",
)
async def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns:
    - healthy: Google Maps API key configured
    - degraded: Scoring works, but place search endpoints cannot reach Google Maps
    """
    configured = get_places_client().is_configured

    # Calculate uptime
    uptime_seconds = int(time.time() - _start_time) if _start_time else 0

    return HealthResponse(
        status="healthy" if configured else "degraded",
        version=__version__,
        places_api_configured=configured,
        uptime_seconds=uptime_seconds,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
    )
