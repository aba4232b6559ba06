"""Inline directive scanning.

A directive is an inline tag in assistant output asking the client to
generate non-text media, e.g.::

    <image width="512" type="text-prompt">a red fox</image>

Matching is regex-based and deliberately narrow.  Callers only use
:func:`find_directives` and :func:`replace_directives`, so the regexes can
later be swapped for a real parser without touching them.

Known limitations
-----------------
- Directives cannot nest.  The first ``</image>`` after an opening tag
  closes it.
- An opening tag with no closing tag is plain text, not an error.
- Content may span lines, so an unclosed ``<image>`` runs on to the next
  directive's ``</image>`` and swallows the prose in between into one
  prompt.
- Only double-quoted attributes are recognised; ``color=red`` and
  ``color='red'`` are ignored without complaint.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

IMAGE_TAG = "image"

# \b keeps <imagery> and similar tags out; [^>]* stops the attribute run at
# the first '>' so ATTRS never spans into the content.
_DIRECTIVE_RE = re.compile(r"<image\b([^>]*)>(.*?)</image>", re.DOTALL)

_ATTRIBUTE_RE = re.compile(r'(\w+)="([^"]*?)"', re.ASCII)


@dataclass(frozen=True)
class Directive:
    """One matched directive.

    Attributes:
        attrs:   Parsed attributes in order of appearance.
        content: Raw inner text, unsanitized.
        span:    ``(start, end)`` offsets of the whole tag in the source text.
        raw:     The matched markup, used as the fallback replacement.
    """

    attrs: dict[str, str]
    content: str
    span: tuple[int, int]
    raw: str


def parse_attributes(raw: str) -> dict[str, str]:
    """Parse ``key="value"`` pairs from the raw attribute substring.

    Keys are trimmed and quotes stripped.  A repeated key keeps its first
    position but takes the last value.  Fragments that do not match the
    pattern contribute nothing.
    """
    attrs: dict[str, str] = {}
    for key, value in _ATTRIBUTE_RE.findall(raw):
        attrs[key.strip()] = value
    return attrs


def _directive_from_match(match: re.Match[str]) -> Directive:
    return Directive(
        attrs=parse_attributes(match.group(1)),
        content=match.group(2),
        span=match.span(),
        raw=match.group(0),
    )


def iter_directives(text: str) -> Iterator[Directive]:
    """Yield directives in *text* left to right, non-overlapping."""
    for match in _DIRECTIVE_RE.finditer(text):
        yield _directive_from_match(match)


def find_directives(text: str) -> list[Directive]:
    """Return every directive in *text*, left to right."""
    return list(iter_directives(text))


def replace_directives(text: str, render: Callable[[Directive], str]) -> str:
    """Replace every directive with ``render(directive)``.

    Text outside matched spans is passed through unchanged.  With no
    directives present the input is returned as is.
    """
    return _DIRECTIVE_RE.sub(lambda match: render(_directive_from_match(match)), text)
