"""
Shared pytest fixtures for the AGIML Bridge test suite.

This module provides fixtures that are automatically available to all test files:
- AGIML settings pointing at a test endpoint
- Middleware instances with an inline spec (no file or network access)
- FastAPI TestClient instances
- A temporary spec folder on disk
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from agiml_bridge.agiml.middleware import AgimlMiddleware
from agiml_bridge.agiml.settings import AgimlSettings
from agiml_bridge.api.server import create_app
from tests.constants import TEST_ENDPOINT, TEST_SPEC

# ============================================================================
# SETTINGS / MIDDLEWARE FIXTURES
# ============================================================================


@pytest.fixture
def settings() -> AgimlSettings:
    """Default settings with the endpoint replaced by a test URL."""
    return AgimlSettings.from_dict({"endpoint": TEST_ENDPOINT})


@pytest.fixture
def middleware(settings) -> AgimlMiddleware:
    """Middleware built from an inline spec."""
    return AgimlMiddleware(settings, spec=TEST_SPEC)


@pytest.fixture
def spec_folder(tmp_path) -> Path:
    """
    Temporary folder holding ``minimal.agiml`` and ``custom.agiml``.

    Returns:
        Path to the folder
    """
    folder = tmp_path / "specs"
    folder.mkdir()
    (folder / "minimal.agiml").write_text("minimal spec from disk", encoding="utf-8")
    (folder / "custom.agiml").write_text("<message>custom</message>", encoding="utf-8")
    return folder


# ============================================================================
# API FIXTURES
# ============================================================================


@pytest.fixture
def test_client(middleware) -> TestClient:
    """
    Create a FastAPI TestClient around the inline-spec middleware.

    Returns:
        TestClient instance for making API requests
    """
    return TestClient(create_app(middleware))
