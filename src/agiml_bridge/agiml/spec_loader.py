"""Specification text loader.

The AGIML specification is the block of instructional markup appended to
the system prompt.  It is loaded exactly once, when ``AgimlMiddleware`` is
constructed, and reused for every request.

Backing stores
--------------
The ``folder`` argument selects where ``<name>.agiml`` is read from:

- ``None``                   — the specs bundled in ``agiml_bridge/specs``.
- ``"http://..."``/``"https://..."`` — fetched with a synchronous
  ``requests.get`` from ``<folder>/<name>.agiml``.
- anything else              — a local directory; ``~`` is expanded.

Every failure (missing file, HTTP error, undecodable bytes, blank text) is
raised as :exc:`MissingSpecificationError`.  Proceeding with an empty spec
would silently disable the markup contract with the model, so the caller is
expected to let construction fail.
"""

from __future__ import annotations

import logging
from importlib import resources
from pathlib import Path

import requests

from agiml_bridge.agiml.errors import MissingSpecificationError

logger = logging.getLogger(__name__)

SPEC_SUFFIX = ".agiml"

# Remote specs are small text files; anything slower than this is a
# misconfigured host rather than a large download.
_FETCH_TIMEOUT_SECONDS = 10.0


def spec_filename(name: str) -> str:
    """Return the file name for the logical spec *name*."""
    return name if name.endswith(SPEC_SUFFIX) else f"{name}{SPEC_SUFFIX}"


def _is_remote(folder: str) -> bool:
    return folder.startswith(("http://", "https://"))


def _load_bundled(name: str) -> str:
    source = f"bundled resource agiml_bridge/specs/{spec_filename(name)}"
    try:
        resource = resources.files("agiml_bridge.specs").joinpath(spec_filename(name))
        return resource.read_text(encoding="utf-8")
    except (FileNotFoundError, UnicodeDecodeError) as exc:
        raise MissingSpecificationError(name, source, exc) from exc


def _load_local(name: str, folder: str) -> str:
    path = Path(folder).expanduser() / spec_filename(name)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise MissingSpecificationError(name, str(path), exc) from exc


def _load_remote(name: str, folder: str) -> str:
    url = f"{folder.rstrip('/')}/{spec_filename(name)}"
    try:
        response = requests.get(url, timeout=_FETCH_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.exceptions.RequestException as exc:
        raise MissingSpecificationError(name, url, exc) from exc
    return response.text


def load_specification(name: str, folder: str | None = None) -> str:
    """Load the specification text for *name*.

    Args:
        name:   Logical spec name (``"minimal"``); the ``.agiml`` suffix is
                optional.
        folder: Backing store selector, see module docstring.

    Returns:
        The specification text, unmodified.

    Raises:
        MissingSpecificationError: If the text cannot be read or is blank.
    """
    if folder is None:
        source = "bundled specs"
        text = _load_bundled(name)
    elif _is_remote(folder):
        source = folder
        text = _load_remote(name, folder)
    else:
        source = folder
        text = _load_local(name, folder)

    if not text.strip():
        raise MissingSpecificationError(name, source, ValueError("specification is empty"))

    logger.info("Loaded AGIML specification %r from %s (%d chars)", name, source, len(text))
    return text
