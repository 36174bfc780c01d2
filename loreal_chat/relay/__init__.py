"""Edge relay that holds the API key and forwards chat requests."""

from .routes import get_upstream_client, router

__all__ = ["router", "get_upstream_client"]
