"""Conversation state passed through the middleware.

The surrounding chat pipeline owns the conversation; the middleware borrows
it for one request/response cycle and mutates it in place.  The same models
double as request/response bodies for the HTTP service, which is why they
are Pydantic models rather than plain dataclasses.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """A single chat message.

    Attributes:
        role: ``"system"``, ``"user"`` or ``"assistant"``.
        content: Message text.
    """

    role: Role
    content: str


class Conversation(BaseModel):
    """Mutable conversation state for one request/response cycle.

    Attributes:
        messages: Prior messages, oldest first.  Only the first ``system``
            message is ever modified.
        user_message: The pending outbound user turn.
        metadata: Request metadata; ``format`` is set to ``"agiml"`` before
            the model call.
        response: Raw model output after the call, ``None`` before it.
    """

    messages: list[Message] = Field(default_factory=list)
    user_message: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    response: str | None = None
