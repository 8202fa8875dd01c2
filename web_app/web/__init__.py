"""Health check and redirect routes for TinyLink."""

from .routes import router as web_router

__all__ = ["web_router"]
