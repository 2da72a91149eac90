"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.config import get_settings
from shared.logging_config import setup_logging
from .dependencies import get_container, require_store
from .errors import register_exception_handlers
from .models import ErrorResponse
from .routes import health
from modules.auth.routes import router as auth_router
from modules.products.routes import router as products_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Pings the store once. On failure the API keeps serving in offline mode.
    """
    # Startup
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.info("Starting %s on %s:%s", settings.app_name, settings.host, settings.port)

    if not get_container().connect_store():
        logger.warning("Database is offline. API endpoints will return 503 status.")
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Inventory management API",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_exception_handlers(app)

    # Documented on every store-backed route
    store_responses = {503: {"model": ErrorResponse, "description": "Database offline"}}

    # Register routes; store-backed routers are guarded by require_store
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(
        auth_router,
        prefix="/api/auth",
        tags=["auth"],
        dependencies=[Depends(require_store)],
        responses=store_responses,
    )
    app.include_router(
        products_router,
        prefix="/api/products",
        tags=["products"],
        dependencies=[Depends(require_store)],
        responses=store_responses,
    )

    return app


# Application instance for uvicorn
app = create_app()
