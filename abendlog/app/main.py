"""
Abend Log - incident log for abnormal job/program ends

FastAPI application entry point.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from abendlog.app.core.config import get_settings
from abendlog.app.core.dependencies import build_controller
from abendlog.app.core.logging import setup_logging, get_logger
from abendlog.app.api import archive, entries, health, view
from abendlog.app.middleware.trace import TracingMiddleware

settings = get_settings()

# Initialize logging
setup_logging(level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(f"🚀 Starting {settings.app_name} v{settings.app_version}")

    from abendlog.app.core.init_db import init_database
    await init_database()

    logger.info(
        f"Log store ready with {len(app.state.controller.store)} logs "
        f"(load source={settings.resolved_log_source_url})"
    )

    yield
    # Shutdown
    logger.info(f"👋 Shutting down {settings.app_name}")

    from abendlog.app.core.database import engine
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    description="Record, browse and edit abend incident logs",
    version=settings.app_version,
    lifespan=lifespan,
)

# One user, one controller for the life of the process
app.state.controller = build_controller(settings)

# Add Middleware
app.add_middleware(TracingMiddleware)

# CORS middleware for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Correlation-ID"],
)

# Include routers
app.include_router(health.router, tags=["Health"])

# Load endpoint (consumed by LogLoader)
app.include_router(archive.router, tags=["Log Archive"])

app.include_router(
    entries.router,
    prefix=f"{settings.api_prefix}/logs",
    tags=["Log Entries"],
)

app.include_router(
    view.router,
    prefix=f"{settings.api_prefix}/view",
    tags=["View"],
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Abend incident log",
        "docs": "/docs",
    }
