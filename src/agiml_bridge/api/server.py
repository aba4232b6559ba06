"""
FastAPI service for the AGIML transform.

This module builds the FastAPI application that exposes the middleware over
HTTP. It sets up:
- CORS middleware for cross-origin requests from browser-based chat clients
- The AgimlMiddleware instance shared by all requests
- All API route endpoints

The application is built by a factory rather than at import time because
building the middleware loads the specification, which can fail.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agiml_bridge import __version__
from agiml_bridge.agiml.middleware import AgimlMiddleware
from agiml_bridge.api.routes import register_routes
from agiml_bridge.config import config

logger = logging.getLogger(__name__)


def create_app(middleware: AgimlMiddleware | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        middleware: Transform instance to serve. Built from the ``[agiml]``
            configuration when omitted.

    Raises:
        MissingSpecificationError: If the configured spec cannot be loaded.
    """
    if middleware is None:
        middleware = AgimlMiddleware(config.agiml_settings())

    app = FastAPI(title="AGIML Bridge", version=__version__)

    # Chat frontends usually run on a different origin than this service.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_routes(app, middleware)
    return app


def start_server(
    host: str | None = None,
    port: int | None = None,
    middleware: AgimlMiddleware | None = None,
) -> None:
    """
    Run the service with uvicorn.

    Args:
        host: Interface to bind; defaults to ``config.server.host``.
        port: Port to bind; defaults to ``config.server.port``.
        middleware: Optional pre-built transform instance.
    """
    import uvicorn

    host = host or config.server.host
    port = port or config.server.port
    app = create_app(middleware)

    logger.info("Starting AGIML Bridge on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level=config.logging.level.lower())


if __name__ == "__main__":
    start_server()
