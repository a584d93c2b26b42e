"""Route modules."""

from .mindmaps import router as mindmaps_router

__all__ = ["mindmaps_router"]
