"""Registry API package."""

from registry.api.routes import router

__all__ = ["router"]
