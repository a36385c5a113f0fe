"""API routes."""

from .compliance import router as compliance_router
from .health import router as health_router

__all__ = ["compliance_router", "health_router"]
