"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from macro_journal.api.foods import router as foods_router
from macro_journal.api.logs import router as logs_router
from macro_journal.api.recipes import router as recipes_router
from macro_journal.api.stats import router as stats_router
from macro_journal.app_logging import configure_logging
from macro_journal.containers import AppContainer
from macro_journal.domain.errors import (
    NotFoundError,
    RecipeNotReadyError,
    ResolutionError,
    ValidationError,
)

_ERROR_STATUS: dict[type[Exception], int] = {
    ValidationError: 422,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    RecipeNotReadyError: status.HTTP_409_CONFLICT,
    ResolutionError: status.HTTP_502_BAD_GATEWAY,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(foods_router)
    app.include_router(logs_router)
    app.include_router(stats_router)
    app.include_router(recipes_router)

    async def domain_error(request: Request, exc: Exception) -> JSONResponse:
        status_code = next(
            code for kind, code in _ERROR_STATUS.items() if isinstance(exc, kind)
        )
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    for error_type in _ERROR_STATUS:
        app.add_exception_handler(error_type, domain_error)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
