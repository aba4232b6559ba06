"""Tests for package version resolution."""

from importlib.metadata import PackageNotFoundError
from unittest.mock import patch

import agiml_bridge


def test_version_is_string():
    assert isinstance(agiml_bridge.__version__, str)
    assert agiml_bridge.__version__


def test_version_falls_back_when_not_installed():
    import importlib

    with patch("importlib.metadata.version", side_effect=PackageNotFoundError):
        reloaded = importlib.reload(agiml_bridge)
        assert reloaded.__version__ == "0.1.0"
    importlib.reload(agiml_bridge)
