import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from metatags.config import settings
from metatags.database import Base, engine
from metatags.middleware.dispatch import AfterDispatchMiddleware
from metatags.middleware.logging import setup_structured_logging
from metatags.plugins import plugin_registry
from metatags.plugins.loader import initialize_plugins
from metatags.utils.cache import cache_manager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up the application...")
    if settings.debug:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")

    await initialize_plugins(plugin_registry)
    await cache_manager.connect()

    yield

    logger.info("Shutting down the application...")
    await plugin_registry.shutdown()
    await cache_manager.disconnect()
    await engine.dispose()


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    setup_structured_logging(log_level=settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        description="CMS host running the meta tags plugin",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(AfterDispatchMiddleware, registry=plugin_registry)

    @app.get("/health", tags=["Root"])
    async def health():
        return {"status": "ok"}

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
