"""API route registration."""

from fastapi import FastAPI

from agiml_bridge.agiml.middleware import AgimlMiddleware
from agiml_bridge.api.routes import health, transform


def register_routes(app: FastAPI, middleware: AgimlMiddleware) -> None:
    """Register all API routes with the FastAPI app."""
    app.include_router(health.router(middleware))
    app.include_router(transform.router(middleware))
