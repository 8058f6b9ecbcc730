"""FastAPI application factory."""

import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles
from fastapi.middleware.cors import CORSMiddleware

from shortlinks.errors import LinkError
from .api import api_router, error_response
from .web import web_router
from .middleware.logging import LoggingMiddleware


STATIC_DIR = os.path.join(os.path.dirname(__file__), "..", "ux", "web")


async def link_error_handler(request: Request, exc: LinkError):
    """Render allocator/resolver errors as ``{"error": ...}`` with their status."""
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Render malformed request bodies as 400 instead of FastAPI's 422."""
    errors = exc.errors()
    if errors and errors[0].get("type") == "json_invalid":
        message = "Invalid JSON body"
    elif errors:
        first = errors[0]
        field = ".".join(
            str(part) for part in first.get("loc", ())
            if part != "body" and not isinstance(part, int)
        )
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


def create_app(
    store_instance,
    service_instance,
    config,
    logger: logging.Logger = None,
) -> FastAPI:
    """Create and configure FastAPI application.

    Args:
        store_instance: Opened link store (None when the lifespan opens it)
        service_instance: Link service (None when the lifespan builds it)
        config: Configuration instance
        logger: Optional service logger

    Returns:
        Configured FastAPI app
    """
    app = FastAPI(
        title="Short Links",
        description="Shorten URLs, redirect visitors and count clicks",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )

    # Store instances in app state for access in routes
    app.state.store = store_instance
    app.state.service = service_instance
    app.state.config = config
    app.state.logger = logger or logging.getLogger("shortlinks")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(LinkError, link_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    css_path = os.path.join(STATIC_DIR, "css")
    js_path = os.path.join(STATIC_DIR, "js")

    if os.path.exists(css_path):
        app.mount("/css", StaticFiles(directory=css_path), name="css")
    if os.path.exists(js_path):
        app.mount("/js", StaticFiles(directory=js_path), name="js")

    app.include_router(api_router, prefix="/api", tags=["API"])
    # Web router last: it owns the catch-all /{code} redirect
    app.include_router(web_router, tags=["Web"])

    return app
