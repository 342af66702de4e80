"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1 import api_router
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.session import engine
from app.web.pages import router as pages_router

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: configure logging; shutdown: dispose the engine pool."""
    # Schema is managed by Alembic (alembic upgrade head)
    configure_logging(settings)
    logger.info("Starting %s (%s, tz=%s)", settings.app_name, settings.environment, settings.timezone)
    yield
    await engine.dispose()


def create_application() -> FastAPI:
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.include_router(api_router, prefix=settings.api_v1_prefix)
    app.include_router(pages_router)
    return app


app = create_application()
