from __future__ import annotations

import json

from fastapi import FastAPI, Request, status
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..config import get_settings
from ..logging_config import configure_logging, get_logger
from ..utils.responses import error_response
from .routes import router

logger = get_logger(__name__)


# Register global exception handlers so every error carries the CORS headers
def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
        logger.debug(
            "http error",
            extra={"detail": exc.detail, "status": exc.status_code, "path": str(request.url)},
        )
        detail = exc.detail
        if not isinstance(detail, str):
            detail = json.dumps(detail)
        return error_response(detail, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error", extra={"path": str(request.url)})
        return error_response(
            "Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def create_app() -> FastAPI:
    """Build the relay application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url=None,
        redoc_url=None,
    )

    register_exception_handlers(app)
    app.include_router(router)

    if not settings.direct_api_key:
        logger.warning("OPENAI_API_KEY is not set; the relay will answer 500")

    return app


configure_logging()
app = create_app()


__all__ = ["app", "create_app"]
