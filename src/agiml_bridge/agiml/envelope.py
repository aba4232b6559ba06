"""Message envelopes and system-prompt injection.

An envelope is the outer ``<message><role>...</role></message>`` shell
placed around a single conversational turn.  User turns are wrapped before
the model call; the assistant envelope is stripped from the model output.

No escaping is applied anywhere in this module.  Literal ``<`` and ``>`` in
user text pass through verbatim, and a user message that itself contains
``</user>`` produces an ambiguous envelope.
"""

from __future__ import annotations

import re
from functools import lru_cache

from agiml_bridge.agiml.conversation import Message

SPEC_SEPARATOR = "\n\n"


@lru_cache(maxsize=None)
def _envelope_pattern(role: str) -> re.Pattern[str]:
    tag = re.escape(role)
    return re.compile(rf"<message>\s*<{tag}>(.*?)</{tag}>\s*</message>", re.DOTALL)


def wrap_envelope(text: str, role: str) -> str:
    """Wrap *text* in a ``<message><role>`` envelope."""
    return f"<message><{role}>{text}</{role}></message>"


def unwrap_envelope(text: str, role: str) -> str:
    """Strip the first ``<message><role>...</role></message>`` envelope.

    Whitespace between the ``message`` and role tags is insignificant and
    the captured body may span lines.  Only the first envelope is replaced
    by its body; text before and after it is kept.  Text without an
    envelope is returned unchanged, so unwrapping is idempotent.
    """
    return _envelope_pattern(role).sub(lambda match: match.group(1), text, count=1)


def wrap_user_message(text: str) -> str:
    """Wrap the outbound user turn in a user envelope."""
    return wrap_envelope(text, "user")


def unwrap_response(text: str) -> str:
    """Strip the assistant envelope from raw model output."""
    return unwrap_envelope(text, "assistant")


def inject_specification(messages: list[Message], spec: str) -> list[Message]:
    """Append *spec* to the first system message, creating one if needed.

    The first ``system`` message gets ``content + "\\n\\n" + spec``.  If there
    is none, a new system message whose content is exactly *spec* is
    inserted at index 0.  No other message is touched.

    The list is modified in place and returned for convenience.
    """
    for message in messages:
        if message.role == "system":
            message.content = f"{message.content}{SPEC_SEPARATOR}{spec}"
            return messages

    messages.insert(0, Message(role="system", content=spec))
    return messages
