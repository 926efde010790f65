"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

import tinylink
from tinylink.errors import LinkError
from tinylink.common.logging_config import get_logger

from .api import api_router
from .api.schemas import ErrorResponse
from .web import web_router
from .middleware.logging import LoggingMiddleware


def _error_response(status_code: int, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(message=message, details=details or None)
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def register_exception_handlers(app: FastAPI, logger: logging.Logger) -> None:
    """Map link errors and request failures onto the error envelope."""

    @app.exception_handler(LinkError)
    async def link_error_handler(request: Request, exc: LinkError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__} in {request.url.path}: {exc.message}")
        else:
            logger.info(f"{type(exc).__name__} in {request.url.path}: {exc.message}")
        return _error_response(exc.status_code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        problems = [
            f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
            for err in exc.errors()
        ]
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "Invalid request: " + "; ".join(problems),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled error in {request.url.path}: {exc}", exc_info=exc)
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def create_app(
    store_instance,
    service_instance,
    config,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Link store instance
        service_instance: Link service instance
        config: Configuration instance

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="TinyLink",
        description="Short link registry with click counting",
        version=tinylink.__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.service = service_instance
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app, get_logger("tinylink.web"))

    # API first so /{short_code} never shadows it
    app.include_router(api_router, prefix="/api", tags=["API"])
    app.include_router(web_router, tags=["Redirect"])

    return app
