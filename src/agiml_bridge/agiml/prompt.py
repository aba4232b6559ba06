"""Prompt sanitization for URL embedding.

The inner text of an image directive becomes the ``prompt`` query
parameter of the image-generation URL.  The steps below run in order and
must not be reordered; downstream caches compare the resulting byte
sequence.

1. Strip leading/trailing whitespace.
2. Replace each newline with a space.
3. Delete every character that is not an ASCII letter, a digit, a space or
   one of ``. , ! ( ) [ ]``.
4. Collapse whitespace runs to a single space.
5. Split on single spaces, percent-encode each token, join with ``%20``.

Step 5 encodes token by token rather than encoding the whole string.  The
output is identical for every string that survives steps 1-4, but the
token-wise form is what consumers were built against, so it stays.

Percent-encoding follows ECMAScript ``encodeURIComponent``: letters, digits
and ``- _ . ! ~ * ' ( )`` are left alone, everything else is escaped as
UTF-8 bytes.
"""

from __future__ import annotations

import re
from urllib.parse import quote

# Characters encodeURIComponent leaves unescaped beyond what quote() always
# keeps (letters, digits, "_.-~").
URI_COMPONENT_SAFE = "!*'()"

TOKEN_SEPARATOR = "%20"

_DISALLOWED_RE = re.compile(r"[^a-zA-Z0-9.,!()\[\] ]")
_WHITESPACE_RE = re.compile(r"\s+")


def encode_uri_component(value: str) -> str:
    """Percent-encode *value* like ECMAScript ``encodeURIComponent``."""
    return quote(value, safe=URI_COMPONENT_SAFE)


def clean_prompt(content: str) -> str:
    """Run steps 1-4: the readable, unencoded prompt."""
    text = content.strip()
    text = text.replace("\n", " ")
    text = _DISALLOWED_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text)


def sanitize_prompt(content: str) -> str:
    """Return the URL-embeddable form of a directive's inner text."""
    tokens = clean_prompt(content).split(" ")
    return TOKEN_SEPARATOR.join(encode_uri_component(token) for token in tokens)
