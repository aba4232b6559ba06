"""Health and root endpoints.

Provides the root ``/`` endpoint (API identity and version) and the
``/health`` endpoint (liveness check with the loaded spec name).

The version string is read from ``agiml_bridge.__version__`` which is
resolved at import time via ``importlib.metadata``.
"""

from fastapi import APIRouter

from agiml_bridge import __version__
from agiml_bridge.agiml.middleware import AgimlMiddleware


def router(middleware: AgimlMiddleware) -> APIRouter:
    """Build the root/health router."""
    api = APIRouter()

    @api.get("/")
    async def root():
        """Root endpoint showing API identity and current version."""
        return {"message": "AGIML Bridge API", "version": __version__}

    @api.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "spec": middleware.settings.spec_name}

    return api
