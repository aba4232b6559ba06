"""AGIML message envelope and inline-directive transform.

This package sits between a chat client and an LLM backend.  Outbound, it
appends the AGIML specification to the system prompt and wraps the user's
turn in an envelope.  Inbound, it strips the envelope from the model output
and turns ``<image>`` directives into markdown image links that point at an
external image-generation service.

Package structure
-----------------
settings.py      AgimlSettings       — frozen settings merged from defaults.
spec_loader.py   load_specification  — bundled / local / HTTP spec text.
conversation.py  Conversation        — messages, user turn, metadata, response.
envelope.py      wrap/unwrap helpers and system-prompt injection.
directives.py    find_directives     — regex directive scanner + attributes.
prompt.py        sanitize_prompt     — URL-safe prompt encoding.
links.py         render_markdown_image — URL and markdown synthesis.
middleware.py    AgimlMiddleware     — the single public entry-point.
errors.py        exception hierarchy.

Typical call flow
-----------------
1. ``middleware = AgimlMiddleware(AgimlSettings.from_dict(overrides))``
2. ``middleware.before_request(conversation)`` before the model call
3. pipeline calls the model and stores ``conversation.response``
4. ``middleware.after_response(conversation)`` after the model call
"""

from agiml_bridge.agiml.conversation import Conversation, Message
from agiml_bridge.agiml.errors import AgimlError, MissingSpecificationError, PromptDecodeError
from agiml_bridge.agiml.middleware import AgimlMiddleware
from agiml_bridge.agiml.settings import AgimlSettings

__all__ = [
    "AgimlError",
    "AgimlMiddleware",
    "AgimlSettings",
    "Conversation",
    "Message",
    "MissingSpecificationError",
    "PromptDecodeError",
]
