"""Image link synthesis.

Turns a sanitized prompt and a directive's attributes into a markdown image
pointing at the image-generation service, followed by an italic caption::

    ![a red fox](https://.../image?prompt=a%20red%20fox&width=256)
    *a red fox*

The link target keeps the percent-encoded prompt.  Alt text and caption use
the decoded, human-readable form.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from urllib.parse import unquote_to_bytes

from agiml_bridge.agiml.errors import PromptDecodeError
from agiml_bridge.agiml.prompt import encode_uri_component

# Excluded from the query string: it only selects the generation modality.
# Exact, case-sensitive match; "Type" is passed through.
EXCLUDED_ATTRIBUTE = "type"

_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_prompt(prompt: str) -> str:
    """Strictly percent-decode *prompt*.

    Unlike :func:`urllib.parse.unquote`, which leaves malformed escapes in
    place and substitutes invalid UTF-8, this raises.

    Raises:
        PromptDecodeError: On a ``%`` not followed by two hex digits, or on
            escapes that do not decode as UTF-8.
    """
    bad = _BAD_ESCAPE_RE.search(prompt)
    if bad is not None:
        raise PromptDecodeError(prompt, f"malformed escape at offset {bad.start()}")
    try:
        return unquote_to_bytes(prompt).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PromptDecodeError(prompt, str(exc)) from exc


def build_image_url(
    endpoint: str,
    prompt: str,
    attrs: Mapping[str, str],
    *,
    encode_params: bool = True,
) -> str:
    """Build the image-generation URL for one directive.

    Args:
        endpoint:      Service base URL; ``/image?prompt=`` is appended.
        prompt:        Already-sanitized prompt, inserted verbatim.
        attrs:         Directive attributes, appended in iteration order.
                       ``type`` is skipped.
        encode_params: Percent-encode attribute keys and values.
    """
    url = f"{endpoint}/image?prompt={prompt}"
    for key, value in attrs.items():
        if key == EXCLUDED_ATTRIBUTE:
            continue
        if encode_params:
            key, value = encode_uri_component(key), encode_uri_component(value)
        url += f"&{key}={value}"
    return url


def render_markdown_image(
    endpoint: str,
    prompt: str,
    attrs: Mapping[str, str],
    *,
    encode_params: bool = True,
) -> str:
    """Render the markdown image and caption replacing a directive.

    Raises:
        PromptDecodeError: If *prompt* cannot be decoded for the alt text.
    """
    url = build_image_url(endpoint, prompt, attrs, encode_params=encode_params)
    readable = decode_prompt(prompt)
    return f"![{readable}]({url})\n*{readable}*"
