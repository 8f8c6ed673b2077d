"""FastAPI application main module.

This module builds the FastAPI application for the ShopAssist service:
product and chat endpoints, the co-browsing WebSocket, error handlers and
health/status endpoints. ``app`` is the default instance configured from
the environment.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from shopassist import __version__
from shopassist.api.exceptions import ShopAssistException
from shopassist.api.logging_config import RequestLoggingMiddleware, setup_logging
from shopassist.api.metrics import metrics_service
from shopassist.api.routes import chat, cobrowse, images, products
from shopassist.cobrowse import create_coordinator
from shopassist.config import Settings
from shopassist.recommender.catalog import Catalog, load_catalog

# Configure module logger
logger = logging.getLogger(__name__)


async def shopassist_exception_handler(request: Request, exc: ShopAssistException) -> JSONResponse:
    """Render a :class:`ShopAssistException` as a JSON error body."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        exc.message,
        extra={
            "path": str(request.url.path),
            "status_code": exc.status_code,
            "error_type": type(exc).__name__,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error_label, "message": exc.message, "details": exc.details},
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures with the common error shape."""
    logger.warning(
        "Request validation failed",
        extra={"path": str(request.url.path), "errors": len(exc.errors())},
    )
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "message": "Request parameters are invalid",
            "details": jsonable_errors(exc),
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.url.path}: {exc}",
        extra={"path": str(request.url.path), "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": "Something went wrong"},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]


def create_app(settings: Optional[Settings] = None, catalog: Optional[Catalog] = None) -> FastAPI:
    """Build a ShopAssist application.

    Args:
        settings: Service settings; read from the environment when omitted.
        catalog: Preloaded catalog; loaded from ``settings.catalog_path``
            when omitted.

    Returns:
        Configured FastAPI application with its own catalog and co-browsing
        coordinator on ``app.state``.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    application = FastAPI(
        title="ShopAssist API",
        description="Shopping assistant with keyword recommendations and co-browsing",
        version=__version__,
    )
    application.state.settings = settings
    application.state.catalog = catalog if catalog is not None else load_catalog(settings.catalog_path)
    application.state.cobrowse = create_coordinator()

    application.add_middleware(RequestLoggingMiddleware)
    application.add_exception_handler(ShopAssistException, shopassist_exception_handler)
    application.add_exception_handler(RequestValidationError, validation_exception_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    application.include_router(chat.router)
    application.include_router(products.router)
    application.include_router(images.router)
    application.include_router(cobrowse.router)

    @application.get("/ping")
    def ping() -> Dict[str, str]:
        """Health check endpoint.

        Example:
            >>> response = client.get("/ping")
            >>> assert response.json() == {"status": "ok"}
        """
        return {"status": "ok"}

    @application.get("/status")
    def service_status(request: Request) -> Dict[str, Any]:
        """Catalog and co-browsing status."""
        current: Catalog = request.app.state.catalog
        return {
            "catalog_loaded": not current.is_empty,
            "num_products": len(current),
            "timestamp_last_loaded": current.loaded_at.isoformat() if not current.is_empty else None,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            **request.app.state.cobrowse.stats(),
        }

    @application.get("/metrics")
    def metrics() -> Dict[str, Any]:
        return metrics_service.get_metrics()

    # Static frontend, mounted last so API routes take precedence
    if Path(settings.static_dir).is_dir():
        application.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    logger.info(
        "Application created",
        extra={"num_products": len(application.state.catalog), "catalog_path": settings.catalog_path},
    )
    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn

    env_settings = Settings.from_env()
    uvicorn.run(
        "shopassist.api.main:app",
        host=env_settings.host,
        port=env_settings.port,
        reload=True,
    )
