import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import api_router
from app.core.config_file import Settings, get_settings
from app.core.db.session import get_session_factory
from app.core.exceptions import StorageError
from app.core.logging import log_validation_failure, setup_logging
from app.repositories.integration_repository import (
    DatabaseStorage,
    InMemoryStorage,
    IntegrationStorage,
)
from app.schemas.routes import first_error

logger = logging.getLogger("app.main")


def build_storage(settings: Settings) -> IntegrationStorage:
    """Create the storage backend named by ``STORAGE_BACKEND``."""
    if settings.STORAGE_BACKEND == "memory":
        return InMemoryStorage()
    if settings.STORAGE_BACKEND == "database":
        return DatabaseStorage(get_session_factory(settings))
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")


def create_app(
    storage: IntegrationStorage | None = None, settings: Settings | None = None
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        storage: Storage to serve from; built from settings when omitted.
        settings: Settings override (defaults to the cached settings).

    Returns:
        Configured FastAPI app with the storage held on ``app.state``.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = FastAPI(
        title="Orcho Integrations API",
        version="0.1.0",
        description="Store API keys for third-party providers",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    app.state.storage = storage if storage is not None else build_storage(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Answer with the first validation error as ``{message, field}``."""
        error = first_error(exc.errors(), strip_location=True)
        log_validation_failure(request.url.path, error.message, error.field)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_dict(),
        )

    @app.exception_handler(StorageError)
    async def storage_exception_handler(request: Request, exc: StorageError) -> JSONResponse:
        """Storage failures surface as a generic 500 without field detail."""
        logger.error(f"Storage error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc) or "Internal Server Error"},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal Server Error"},
        )

    @app.get("/healthz", tags=["system"])
    def healthz():
        """Health check endpoint."""
        return {
            "status": "ok",
            "env": settings.ENV,
            "debug": settings.DEBUG,
        }

    app.include_router(api_router)

    logger.info(
        f"Application configured - env={settings.ENV}, storage={type(app.state.storage).__name__}"
    )
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
