"""
FastAPI Application - MediaForge generation API.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mediaforge import __version__
from mediaforge.providers import ProviderError

from .routes import health_router, keys_router, generation_router, workflow_router, files_router
from .exceptions import APIError, api_error_handler, provider_error_handler, generic_exception_handler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info("Starting MediaForge API...")
    logger.info("=" * 60)

    from .dependencies import get_config, get_credential_manager, close_clients
    get_config().log_status()

    for name, info in get_credential_manager().status().items():
        if info["is_set"]:
            logger.info(f"  {name} ({info['role']}): configured {info['masked']} from {info['source']}")
        else:
            logger.warning(f"  {name} ({info['role']}): missing - add it via PUT /api/keys/{name}")

    logger.info("Server ready! Full workflow available at POST /api/workflow")

    yield

    await close_clients()
    logger.info("Shutting down MediaForge API...")


def create_app(debug: bool = False) -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title="MediaForge API",
        description="Script, scene image and narration generation with zip export",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
        debug=debug,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(ProviderError, provider_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    app.include_router(health_router)
    app.include_router(keys_router)
    app.include_router(generation_router)
    app.include_router(workflow_router)
    app.include_router(files_router)

    return app


def _debug_enabled() -> bool:
    from mediaforge.config import config
    return config.debug


app = create_app(debug=_debug_enabled())


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mediaforge.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
