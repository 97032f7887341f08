"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from landscape_studio.config import settings
from landscape_studio.infrastructure.catalog_client import get_catalog, load_catalog
from landscape_studio.middleware.error_handler import ErrorHandlerMiddleware
from landscape_studio.api.v1.routers import bundles, designs

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_requests}/minute"],
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Loads the plant catalog before the first request is served.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"Scoring config: overlap_tolerance={settings.overlap_tolerance}, "
                f"coverage_target={settings.coverage_target}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")

    catalog = await load_catalog()
    logger.info(f"Catalog ready: {len(catalog.plants)} plants, {len(catalog.bundles)} bundles")

    yield

    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Design Scoring & Validation API for landscape bed designs

    This API scores a bed of placed plants against horticultural design
    rules and expands reusable planting bundles into placements.

    ## Features

    - **Show Ready Score**: Weighted 0-100 score from coverage, color harmony,
      height layering, variety, mass planting and bloom sequence
    - **Residential Score**: Layering, spacing, odd groupings, zone
      compliance, four-season interest and curb appeal
    - **Bundles**: Expand templates into placements, check layer ratios and
      rescale for young or mature installs
    - **Blueprint Export**: JSON document of a design with its scores
    - **Rate Limiting**: Protects the API from abuse
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(designs.router, prefix="/api/v1")
app.include_router(bundles.router, prefix="/api/v1")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """Health check including the size of the loaded catalog."""
    catalog = get_catalog()
    return {
        "status": "healthy",
        "service": settings.app_name,
        "catalog": {"plants": len(catalog.plants), "bundles": len(catalog.bundles)},
    }
