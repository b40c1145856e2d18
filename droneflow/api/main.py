"""
Main FastAPI application for DroneFlow.

DroneFlow: project and work order lifecycle tracking for drone survey work.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from droneflow.api.error_handlers import register_error_handlers
from droneflow.api.middleware.logging import LoggingMiddleware
from droneflow.api.middleware.request_id import RequestIDMiddleware
from droneflow.api.routers import health, project_lifecycle, records, work_order_lifecycle
from droneflow.core.database import (
    create_engine_from_settings,
    create_session_factory,
    init_database,
)
from droneflow.core.logging import configure_logging
from droneflow.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the engine on startup, dispose it on shutdown."""
    settings: Settings = app.state.settings
    engine = create_engine_from_settings(settings)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    try:
        await init_database(engine)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        await engine.dispose()
        raise

    logger.info(f"{settings.app_name} {settings.app_version} started ({settings.environment})")
    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; tests pass their own Settings."""
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, format_type=settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        description="Project and work order lifecycle tracking",
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings

    # Order matters - last added = first executed
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(records.router, prefix="/api")
    app.include_router(project_lifecycle.router, prefix="/api")
    app.include_router(work_order_lifecycle.router, prefix="/api")

    @app.get("/")
    async def root():
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "operational",
            "docs": "/docs",
            "health": "/health",
        }

    return app


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "droneflow.api.main:create_app",
        factory=True,
        host=_settings.host,
        port=_settings.port,
        reload=_settings.debug,
    )
