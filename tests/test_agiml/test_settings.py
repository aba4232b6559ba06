"""Unit tests for AgimlSettings."""

from dataclasses import FrozenInstanceError

import pytest

from agiml_bridge.agiml.settings import (
    DEFAULT_ENDPOINT,
    AgimlSettings,
    load_settings_file,
)

pytestmark = pytest.mark.unit


class TestAgimlSettingsFromDict:
    """Tests for AgimlSettings.from_dict."""

    def test_empty_dict_gives_defaults(self):
        cfg = AgimlSettings.from_dict({})
        assert cfg == AgimlSettings()
        assert cfg.endpoint == DEFAULT_ENDPOINT
        assert cfg.encode_params is True
        assert cfg.supported_output_types == ("image", "speech")
        assert cfg.default_tools == ("hamster_removal", "python", "node")
        assert cfg.spec_folder is None
        assert cfg.spec_name == "minimal"

    def test_none_gives_defaults(self):
        assert AgimlSettings.from_dict(None) == AgimlSettings()

    def test_all_fields_populated(self):
        cfg = AgimlSettings.from_dict(
            {
                "endpoint": "https://example.org/api/generate",
                "encode_params": False,
                "supported_output_types": ["image"],
                "default_tools": ["python"],
                "spec_folder": "~/specs",
                "spec_name": "full",
            }
        )
        assert cfg.endpoint == "https://example.org/api/generate"
        assert cfg.encode_params is False
        assert cfg.supported_output_types == ("image",)
        assert cfg.default_tools == ("python",)
        assert cfg.spec_folder == "~/specs"
        assert cfg.spec_name == "full"

    def test_string_values_are_coerced(self):
        """INI and environment values arrive as strings."""
        cfg = AgimlSettings.from_dict(
            {
                "encode_params": "false",
                "supported_output_types": "image, speech , ",
                "default_tools": "node",
            }
        )
        assert cfg.encode_params is False
        assert cfg.supported_output_types == ("image", "speech")
        assert cfg.default_tools == ("node",)

    def test_blank_spec_folder_means_bundled(self):
        assert AgimlSettings.from_dict({"spec_folder": "  "}).spec_folder is None

    def test_endpoint_kept_verbatim(self):
        """A trailing slash is not normalised away."""
        cfg = AgimlSettings.from_dict({"endpoint": "https://example.org/api/"})
        assert cfg.endpoint == "https://example.org/api/"

    def test_unknown_keys_are_retained(self):
        cfg = AgimlSettings.from_dict({"colour": "blue", "spec_name": "x"})
        assert cfg.extras == {"colour": "blue"}
        assert "colour" not in cfg.public_view()

    def test_extras_are_read_only(self):
        cfg = AgimlSettings.from_dict({"colour": "blue"})
        with pytest.raises(TypeError):
            cfg.extras["colour"] = "red"  # type: ignore[index]

    def test_extras_copied_from_caller(self):
        source = {"colour": "blue"}
        cfg = AgimlSettings(extras=source)
        source["colour"] = "red"
        assert cfg.extras == {"colour": "blue"}

    def test_supports(self):
        cfg = AgimlSettings.from_dict({"supported_output_types": "speech"})
        assert cfg.supports("speech")
        assert not cfg.supports("image")

    def test_is_frozen(self):
        cfg = AgimlSettings()
        with pytest.raises(FrozenInstanceError):
            cfg.endpoint = "http://elsewhere"  # type: ignore[misc]

    def test_is_hashable(self):
        cfg = AgimlSettings.from_dict({"colour": "blue"})
        assert hash(cfg) == hash(AgimlSettings.from_dict({"colour": "blue"}))
        assert {cfg: "ok"}[cfg] == "ok"


class TestLoadSettingsFile:
    def test_reads_mapping(self, tmp_path):
        path = tmp_path / "agiml.yaml"
        path.write_text("endpoint: https://example.org\nspec_name: full\n", encoding="utf-8")
        assert load_settings_file(path) == {"endpoint": "https://example.org", "spec_name": "full"}

    def test_empty_file_gives_empty_mapping(self, tmp_path):
        path = tmp_path / "agiml.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings_file(path) == {}

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "agiml.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_settings_file(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings_file(tmp_path / "missing.yaml")
