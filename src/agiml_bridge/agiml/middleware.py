"""AGIML chat middleware.

``AgimlMiddleware`` is the single public entry-point of the transform.  It
plugs into a chat pipeline at two points:

``before_request``  (once per outbound turn, before the model call)
    1. Append the specification text to the system prompt.
    2. Wrap the pending user turn in ``<message><user>`` and set
       ``metadata["format"] = "agiml"``.

``after_response``  (once per inbound turn, after the model call)
    3. Strip the ``<message><assistant>`` envelope.
    4. Find every ``<image>`` directive, left to right.
    5. Replace each with a markdown image + caption.

Caller contract
---------------
Construction loads the specification and raises
:exc:`MissingSpecificationError` if it cannot.  After construction nothing
in the middleware is mutated, so one instance can serve any number of
independent conversations concurrently.

``after_response`` never raises for content reasons.  A directive whose
prompt cannot be decoded is left as its original markup and a WARNING is
logged; the remaining directives in the same response are still
converted.
"""

from __future__ import annotations

import logging

from agiml_bridge.agiml.conversation import Conversation
from agiml_bridge.agiml.directives import IMAGE_TAG, Directive, replace_directives
from agiml_bridge.agiml.envelope import inject_specification, unwrap_response, wrap_user_message
from agiml_bridge.agiml.errors import MissingSpecificationError, PromptDecodeError
from agiml_bridge.agiml.links import render_markdown_image
from agiml_bridge.agiml.prompt import sanitize_prompt
from agiml_bridge.agiml.settings import AgimlSettings
from agiml_bridge.agiml.spec_loader import load_specification

logger = logging.getLogger(__name__)

FORMAT_KEY = "format"
FORMAT_MARKER = "agiml"


class AgimlMiddleware:
    """Bidirectional AGIML transform for one chat pipeline.

    Attributes:
        name:      Pipeline identifier, always ``"agiml"``.
        _settings: Frozen settings shared with every stage.
        _spec:     Specification text appended to system prompts.
    """

    name = FORMAT_MARKER

    def __init__(self, settings: AgimlSettings | None = None, *, spec: str | None = None) -> None:
        """Initialise the middleware and load the specification.

        Args:
            settings: Merged settings; defaults when ``None``.
            spec:     Specification text.  When ``None`` it is loaded from
                      ``settings.spec_folder`` / ``settings.spec_name``.

        Raises:
            MissingSpecificationError: If no non-blank spec is available.
        """
        self._settings = settings if settings is not None else AgimlSettings()
        logger.debug("AgimlMiddleware settings: %s", self._settings.public_view())

        if spec is None:
            spec = load_specification(self._settings.spec_name, self._settings.spec_folder)
        elif not spec.strip():
            raise MissingSpecificationError(
                self._settings.spec_name,
                "caller-supplied text",
                ValueError("specification is empty"),
            )
        self._spec = spec

    @property
    def settings(self) -> AgimlSettings:
        return self._settings

    @property
    def spec(self) -> str:
        return self._spec

    # ── Outbound ──────────────────────────────────────────────────────────────

    def before_request(self, conversation: Conversation) -> Conversation:
        """Inject the specification and envelope the pending user turn in place."""
        inject_specification(conversation.messages, self._spec)
        conversation.user_message = wrap_user_message(conversation.user_message)
        conversation.metadata = {**conversation.metadata, FORMAT_KEY: FORMAT_MARKER}
        return conversation

    # ── Inbound ───────────────────────────────────────────────────────────────

    def after_response(self, conversation: Conversation) -> Conversation:
        """Convert the model response in place; no-op when it is empty."""
        if not conversation.response:
            return conversation
        conversation.response = self.process_response(conversation.response)
        return conversation

    def process_response(self, response: str) -> str:
        """Unwrap *response* and convert its image directives."""
        content = unwrap_response(response)
        if not self._settings.supports(IMAGE_TAG):
            logger.debug("Image output not supported; directives left as markup.")
            return content
        return replace_directives(content, self._render_directive)

    def _render_directive(self, directive: Directive) -> str:
        prompt = sanitize_prompt(directive.content)
        try:
            return render_markdown_image(
                self._settings.endpoint,
                prompt,
                directive.attrs,
                encode_params=self._settings.encode_params,
            )
        except PromptDecodeError as exc:
            logger.warning(
                "AgimlMiddleware: leaving directive at %d-%d unconverted: %s",
                directive.span[0],
                directive.span[1],
                exc,
            )
            return directive.raw
