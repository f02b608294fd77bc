"""FastAPI application factory for zplimage."""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI

from zplimage.api import routes as api_routes
from zplimage.config import load_config, settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(f"Loading configuration from {settings.config_file}")
    defaults = load_config(settings.config_file)
    logger.info(f"Default label width {defaults.width} dots, threshold {defaults.threshold}")

    api_routes.set_app_state(
        defaults,
        api_key=settings.api_key,
        max_upload_bytes=settings.max_upload_bytes,
        max_width=settings.max_width,
    )

    logger.info("zplimage startup complete")

    yield

    logger.info("zplimage shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="zplimage",
        description="Convert images to ZPL graphic field labels",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(
        api_routes.router,
        dependencies=[Depends(api_routes.verify_api_key)],
    )

    return app


# Default app instance for uvicorn
app = create_app()
