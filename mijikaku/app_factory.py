"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from mijikaku.api import links, redirect
from mijikaku.config import Settings, settings as default_settings
from mijikaku.database.connection import create_db_engine, create_session_factory, init_db
from mijikaku.errors import (
    AppError,
    app_error_handler,
    http_exception_handler,
    request_validation_handler,
)
from mijikaku.logging_config import setup_logging
from mijikaku.middleware.logging import LoggingMiddleware
from mijikaku.services.short_code import ShortCodeGenerator


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Own the database engine for the lifetime of the app.

    The schema is created before the first request is accepted. If that
    fails the exception propagates and the server does not start.
    """
    settings: Settings = app.state.settings

    engine = create_db_engine(settings)
    try:
        init_db(engine)
    except Exception:
        logger.critical("Database migration failed, refusing to start", exc_info=True)
        engine.dispose()
        raise

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    logger.info(f"{settings.app_name} {settings.app_version} ready at {settings.base_url}")

    try:
        yield
    finally:
        engine.dispose()
        logger.info("Database engine disposed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to run with; the environment-loaded settings
            when omitted.

    Returns:
        Configured FastAPI app
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, json_format=settings.log_json)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="A URL shortener service built with FastAPI",
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.short_code_generator = ShortCodeGenerator(
        length=settings.short_code_length,
        alphabet=settings.short_code_alphabet
    )

    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.get("/health", tags=["health"])
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "environment": settings.environment}

    # Order matters: /health must be registered before the /{link_id} catch-all
    app.include_router(links.router)
    app.include_router(redirect.router)

    return app
