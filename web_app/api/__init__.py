"""JSON API for short links."""

from .routes import router as api_router, error_response

__all__ = ["api_router", "error_response"]
