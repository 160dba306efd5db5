"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from equipment_registry.config import get_settings
from equipment_registry.infrastructure.database import Base, engine
from equipment_registry.infrastructure.database.session import ensure_sqlite_directory
from equipment_registry.infrastructure.logging.log_config import setup_logging
from equipment_registry.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging and create tables."""
    settings = get_settings()
    setup_logging()

    if settings.storage_backend == "database":
        ensure_sqlite_directory(settings.database_url)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database ready at %s", settings.database_url)
    else:
        logger.info("Using JSON cache store at %s", settings.json_cache_file)

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "equipment_registry.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
