"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from prop_planner.app_context import get_app_context
from prop_planner.config.settings import get_settings
from prop_planner.config.logging_config import setup_logging
from prop_planner.repositories.sqlalchemy.database import init_db
from prop_planner.api.routers import accounts_router, planner_router, stats_router
from prop_planner.core.exceptions import (
    AppError,
    NotFoundError,
    PersistenceError,
    OptimizerError,
    AnalyzerError,
    MalformedResponseError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    context = get_app_context()
    try:
        await context.store.load()
    except AppError as e:
        logger.warning("Starting with local account data only: %s", e.message)
    yield
    # Shutdown
    await context.aclose()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Prop-firm account tracking and weekly session planning",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(planner_router)
app.include_router(stats_router)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, (PersistenceError, OptimizerError, AnalyzerError, MalformedResponseError)):
        return 502
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_status_for(exc),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
