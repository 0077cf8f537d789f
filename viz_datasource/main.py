"""FastAPI application hosting the datasource service."""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI

from .api.dependencies import close_storage, create_storage, get_storage, set_storage
from .api.error_handlers import register_error_handlers
from .core.config import Settings, resolve_settings
from .core.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create the application."""
    settings = resolve_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifecycle."""
        configure_logging(settings.log_level)
        logger.info(f"Starting {settings.app_name}...")

        storage = await create_storage(settings)
        set_storage(storage)
        app.state.storage = storage
        try:
            yield
        finally:
            logger.info("Shutting down...")
            await close_storage(storage)
            set_storage(None)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan
    )
    register_error_handlers(app)

    @app.get("/health")
    async def health_check():
        """Report storage readiness."""
        try:
            storage = get_storage()
        except RuntimeError:
            return {"status": "starting", "storage_backend": settings.storage_backend}

        status = {"status": "healthy", "storage_backend": settings.storage_backend}
        if storage.pool is not None:
            try:
                await storage.pool.fetchrow("SELECT 1 AS ok")
            except Exception as e:
                logger.error(f"Health check database error: {e}")
                status["status"] = "unhealthy"
                status["database"] = "unavailable"
        return status

    return app


app = create_app()
