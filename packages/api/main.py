"""ClipRender API - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from packages.core import configure_logging, ensure_dir, get_config

from .dependencies import clear_dependency_cache
from .routes import render_router, timeline_router
from .schemas import HealthResponse

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    config = get_config()
    configure_logging(config)
    logger.info("ClipRender API starting (%s)", config.env.value)
    logger.info("  Renders directory: %s", config.renders_dir)
    logger.info("  Workers: %d, fps: %d", config.max_workers, config.fps)

    ensure_dir(config.renders_dir)

    yield

    # Shutdown
    logger.info("ClipRender API shutting down...")
    clear_dependency_cache()


app = FastAPI(
    title="ClipRender API",
    description="Timeline layout and asynchronous MP4 rendering of clip sequences with a text overlay",
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
config = get_config()
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(config.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(render_router)
app.include_router(timeline_router)


@app.get("/health", response_model=HealthResponse, tags=["health"])
@app.get("/api/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Check if the API is up."""
    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        services={
            "api": "running",
            "render": "available",
            "timeline": "available",
        },
    )


@app.get("/", include_in_schema=False)
async def root():
    """Point at the API documentation."""
    return {
        "message": f"ClipRender API v{API_VERSION}",
        "docs": "/docs",
        "health": "/api/health",
    }
