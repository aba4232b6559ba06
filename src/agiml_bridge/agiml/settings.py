"""AGIML transform settings.

``AgimlSettings`` is a frozen dataclass built once from built-in defaults
overridden by caller-supplied values.  It is passed by reference to every
stage of the transform and never mutated at runtime.

Override sources
----------------
- Plain dicts (``AgimlSettings.from_dict``), typically the ``[agiml]`` section
  of ``config/server.ini`` plus environment variables, collected by
  :mod:`agiml_bridge.config`.
- YAML files (``load_settings_file``) passed to the CLI via ``--settings``.

Values coming from INI files and the environment arrive as strings, so
``from_dict`` coerces comma-separated strings to tuples and truthy strings
(``"true"``, ``"yes"``, ``"1"``, ``"on"``) to booleans.

Unknown keys are retained in ``extras`` but ignored by the transform.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

import yaml

DEFAULT_ENDPOINT = "https://defactofficial-mmapi-2.hf.space/api/generate"
DEFAULT_SPEC_NAME = "minimal"
DEFAULT_OUTPUT_TYPES: tuple[str, ...] = ("image", "speech")
DEFAULT_TOOLS: tuple[str, ...] = ("hamster_removal", "python", "node")

_KNOWN_KEYS = frozenset(
    {
        "endpoint",
        "encode_params",
        "supported_output_types",
        "default_tools",
        "spec_folder",
        "spec_name",
    }
)


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "on", "enabled")
    return bool(value)


def _coerce_tuple(value: Any) -> tuple[str, ...]:
    if isinstance(value, str):
        return tuple(item.strip() for item in value.split(",") if item.strip())
    return tuple(str(item) for item in value)


@dataclass(frozen=True)
class AgimlSettings:
    """Immutable configuration for the AGIML middleware.

    Attributes:
        endpoint:               Base URL of the image-generation service.
                                ``/image?prompt=...`` is appended per directive.
        encode_params:          Percent-encode directive attributes when
                                appending them as query parameters.  Reserved;
                                always ``True`` in practice.
        supported_output_types: Output kinds the transform synthesizes links
                                for.  Image directives are left untouched when
                                ``"image"`` is missing.
        default_tools:          Tool identifiers advertised to the model.
        spec_folder:            Where to look for ``<spec_name>.agiml``.  A
                                local directory, an ``http(s)://`` base URL,
                                or ``None`` for the bundled specs.
        spec_name:              Logical name of the specification to load.
        extras:                 Unrecognised override keys, kept verbatim in a
                                read-only mapping.  Not part of the hash.
    """

    endpoint: str = DEFAULT_ENDPOINT
    encode_params: bool = True
    supported_output_types: tuple[str, ...] = DEFAULT_OUTPUT_TYPES
    default_tools: tuple[str, ...] = DEFAULT_TOOLS
    spec_folder: str | None = None
    spec_name: str = DEFAULT_SPEC_NAME
    extras: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extras", MappingProxyType(dict(self.extras)))

    def supports(self, output_type: str) -> bool:
        """Return ``True`` if links are synthesized for *output_type*."""
        return output_type in self.supported_output_types

    @classmethod
    def from_dict(cls, overrides: Mapping[str, Any] | None = None) -> AgimlSettings:
        """Merge *overrides* over the built-in defaults.

        Missing keys keep their defaults, so an empty mapping yields the
        default settings.  ``None`` values are treated as missing except for
        ``spec_folder``, where ``None`` selects the bundled specs.
        """
        data = dict(overrides or {})
        defaults = cls()

        spec_folder = data.get("spec_folder", defaults.spec_folder)
        if isinstance(spec_folder, str) and not spec_folder.strip():
            spec_folder = None

        def pick(key: str) -> Any:
            value = data.get(key)
            return getattr(defaults, key) if value is None else value

        return cls(
            endpoint=str(pick("endpoint")),
            encode_params=_coerce_bool(pick("encode_params")),
            supported_output_types=_coerce_tuple(pick("supported_output_types")),
            default_tools=_coerce_tuple(pick("default_tools")),
            spec_folder=None if spec_folder is None else str(spec_folder),
            spec_name=str(pick("spec_name")),
            extras={key: value for key, value in data.items() if key not in _KNOWN_KEYS},
        )

    def public_view(self) -> dict[str, Any]:
        """Settings as a JSON-serialisable dict (``extras`` excluded)."""
        return {
            "endpoint": self.endpoint,
            "encode_params": self.encode_params,
            "supported_output_types": list(self.supported_output_types),
            "default_tools": list(self.default_tools),
            "spec_folder": self.spec_folder,
            "spec_name": self.spec_name,
        }


def load_settings_file(path: Path | str) -> dict[str, Any]:
    """Read settings overrides from a YAML file.

    Raises:
        FileNotFoundError: If *path* does not exist.
        ValueError: If the document is not a mapping at the top level.
    """
    settings_path = Path(path)
    with settings_path.open(encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError(f"{settings_path.name} must be a YAML mapping at the top level.")
    return raw
