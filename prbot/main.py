"""prbot - FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from prbot.config import settings
from prbot.infrastructure.api.routes_health import router as health_router
from prbot.infrastructure.api.routes_webhook import router as webhook_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    if settings.dry_run:
        logger.info("=====================")
        logger.info(" Running in dry mode ")
        logger.info("=====================")
    logger.info("Listening for GitHub webhooks at %s", settings.webhook_path)
    yield


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    app = FastAPI(
        title="prbot",
        description="Pull request title checks, external contributor handling and SME assignment",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(health_router, prefix="/api")
    app.include_router(webhook_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("prbot.main:app", host=settings.host, port=settings.port)
