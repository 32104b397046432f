"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sitebuilder.config import get_settings
from sitebuilder.infrastructure.database import Base, engine
from sitebuilder.infrastructure.logging.log_config import setup_logging
from sitebuilder.presentation.api.errors import register_exception_handlers
from sitebuilder.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging and create tables."""
    settings = get_settings()
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    if not settings.openrouter_api_key.strip():
        logger.warning("OPENROUTER_API_KEY is not configured; generated copy will use templates.")
    if not settings.pexels_configured:
        logger.warning("PEXELS_API_KEY is not configured; website generation will fail until it is set.")

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

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "sitebuilder.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
