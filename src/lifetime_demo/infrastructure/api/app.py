import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lifetime_demo.application import LifetimeRegistry, build_operation_registry
from lifetime_demo.config import DemoSettings, get_settings
from lifetime_demo.domain import LifetimeDemoError
from lifetime_demo.infrastructure.api.routes import create_operations_router
from lifetime_demo.infrastructure.api.schemas import ErrorResponse
from lifetime_demo.infrastructure.fastapi_integration import ScopedRegistryMiddleware

logger = logging.getLogger(__name__)


async def handle_registry_error(request: Request, exc: LifetimeDemoError) -> JSONResponse:
    """Report registry errors as configuration bugs.

    They are never transient, so the request fails with a 500 status.
    """
    logger.error("Registry error while handling %s %s: %s", request.method, request.url.path, exc)
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=500, content=body.model_dump())


def create_app(settings: Optional[DemoSettings] = None, registry: Optional[LifetimeRegistry] = None) -> FastAPI:
    """Create the demo application.

    Args:
        settings: Optional settings, read from the environment otherwise.
        registry: Optional registry, a registry with the operation capabilities is built otherwise.

    Returns:
        The configured FastAPI application. The registry is available as ``app.state.registry``.

    Example:
        >>> app = create_app()
        >>> uvicorn.run(app)
    """
    settings = settings if settings is not None else get_settings()
    registry = registry if registry is not None else build_operation_registry()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("DI Lifetime Demo started! Navigate to http://%s:%d", settings.host, settings.port)
        yield

    app = FastAPI(
        title=settings.title,
        description=settings.description,
        version="v1",
        docs_url="/docs" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.settings = settings

    app.add_middleware(ScopedRegistryMiddleware, registry=registry)
    app.add_exception_handler(LifetimeDemoError, handle_registry_error)
    app.include_router(create_operations_router(registry, settings))

    return app
