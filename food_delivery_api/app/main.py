"""
Main entrypoint for the Food Delivery API.

This module assembles the FastAPI application, sets up logging,
opens the persistent state and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn food_delivery_api.app.main:app --reload

Domain errors raised by the services are rendered here as
``{"kind": ..., "detail": ...}`` JSON bodies.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.errors import DomainError, InvalidPayload, Unauthorized
from .core.logging_config import setup_logging
from .core.store import AppState
from .core.validation import format_errors

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if isinstance(exc, Unauthorized):
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.msg)
    else:
        logger.info("%s %s failed with %s: %s", request.method, request.url.path, exc.kind, exc.msg)
    headers = None
    if isinstance(exc, Unauthorized) and not exc.authenticated:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI body/path validation failures as InvalidPayload."""
    error = InvalidPayload(format_errors(exc.errors()))
    logger.info("%s %s invalid payload: %s", request.method, request.url.path, error.msg)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    database_url : Optional[str]
        SQLite path overriding ``settings.database_url``; tests pass a
        temporary file here.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.  The persistent
        state is opened when the application starts and closed when it
        shuts down.
    """
    setup_logging(settings.log_level, settings.log_file or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Raises IdCounterCorrupted on a damaged database, which aborts startup.
        app.state.store = AppState.open(database_url)
        logger.info("%s %s started", settings.project_name, settings.api_version)
        try:
            yield
        finally:
            app.state.store.close()
            logger.info("State closed")

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/", tags=["root"])
    async def read_root() -> dict:
        return {"name": settings.project_name, "version": settings.api_version}

    return app


# Created at import time so uvicorn can discover it.
app = create_app()
