"""Typed exceptions for the AGIML transform layer.

Only two conditions are treated as failures:

- The specification text cannot be loaded when the middleware is built.
  Construction fails; there is no "empty spec" mode.
- The human-readable form of a sanitized prompt cannot be recovered by
  percent-decoding.  The middleware catches this per directive and leaves
  the directive's original markup in place.

Everything else (no system message, no envelope, unmatched ``<image>`` tags,
malformed attribute fragments) degrades to a well-defined default and is not
an error.
"""

from __future__ import annotations


class AgimlError(RuntimeError):
    """Base exception for AGIML transform failures."""


class MissingSpecificationError(AgimlError):
    """The AGIML specification text could not be loaded.

    Args:
        name: Logical spec name that was requested (e.g. ``"minimal"``).
        source: Human-readable description of where the loader looked.
        cause: Optional underlying exception.
    """

    def __init__(self, name: str, source: str, cause: Exception | None = None) -> None:
        message = f"AGIML specification {name!r} could not be loaded from {source}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.name = name
        self.source = source
        self.cause = cause


class PromptDecodeError(AgimlError):
    """A sanitized prompt contains an invalid percent-escape sequence."""

    def __init__(self, prompt: str, reason: str) -> None:
        super().__init__(f"cannot decode prompt {prompt!r}: {reason}")
        self.prompt = prompt
        self.reason = reason
