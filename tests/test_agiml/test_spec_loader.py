"""Unit tests for the specification loader."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from agiml_bridge.agiml.errors import MissingSpecificationError
from agiml_bridge.agiml.spec_loader import load_specification, spec_filename

pytestmark = pytest.mark.unit


def _mock_response(text: str) -> MagicMock:
    """Build a mock requests.Response for a successful fetch."""
    mock_resp = MagicMock()
    mock_resp.raise_for_status.return_value = None
    mock_resp.text = text
    return mock_resp


class TestSpecFilename:
    def test_suffix_added(self):
        assert spec_filename("minimal") == "minimal.agiml"

    def test_suffix_not_doubled(self):
        assert spec_filename("minimal.agiml") == "minimal.agiml"


class TestBundled:
    def test_minimal_spec_is_bundled(self):
        text = load_specification("minimal")
        assert "<message>" in text
        assert "<image" in text

    def test_unknown_bundled_spec_raises(self):
        with pytest.raises(MissingSpecificationError, match="no-such-spec"):
            load_specification("no-such-spec")


class TestLocalFolder:
    def test_reads_from_folder(self, spec_folder):
        assert load_specification("minimal", str(spec_folder)) == "minimal spec from disk"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(MissingSpecificationError) as excinfo:
            load_specification("absent", str(tmp_path))
        assert isinstance(excinfo.value.cause, FileNotFoundError)

    def test_blank_file_raises(self, tmp_path):
        (tmp_path / "blank.agiml").write_text("  \n", encoding="utf-8")
        with pytest.raises(MissingSpecificationError, match="empty"):
            load_specification("blank", str(tmp_path))

    def test_home_directory_is_expanded(self, spec_folder, monkeypatch):
        monkeypatch.setenv("HOME", str(spec_folder.parent))
        folder = f"~/{spec_folder.name}"
        assert load_specification("custom", folder) == "<message>custom</message>"


class TestRemote:
    def test_fetches_from_base_url(self):
        with patch("requests.get", return_value=_mock_response("remote spec")) as mock:
            text = load_specification("minimal", "https://specs.example.org/agiml/")
        assert text == "remote spec"
        assert mock.call_args[0][0] == "https://specs.example.org/agiml/minimal.agiml"
        assert mock.call_args[1]["timeout"] > 0

    def test_http_error_raises(self):
        mock_resp = _mock_response("")
        mock_resp.raise_for_status.side_effect = requests.exceptions.HTTPError("404")
        with patch("requests.get", return_value=mock_resp):
            with pytest.raises(MissingSpecificationError):
                load_specification("minimal", "https://specs.example.org")

    def test_connection_error_raises(self):
        with patch("requests.get", side_effect=requests.exceptions.ConnectionError):
            with pytest.raises(MissingSpecificationError):
                load_specification("minimal", "http://localhost:1")

    def test_empty_body_raises(self):
        with patch("requests.get", return_value=_mock_response("")):
            with pytest.raises(MissingSpecificationError):
                load_specification("minimal", "https://specs.example.org")
