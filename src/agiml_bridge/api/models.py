"""
Pydantic models for API requests and responses.

Conversations are sent and returned as
:class:`~agiml_bridge.agiml.conversation.Conversation` directly; this module
only adds the payloads specific to the HTTP surface.
"""

from pydantic import BaseModel

# ============================================================================
# REQUEST MODELS (Client → Server)
# ============================================================================


class RenderRequest(BaseModel):
    """
    Raw model output to convert.

    Attributes:
        text: Model output, with or without an assistant envelope
    """

    text: str


# ============================================================================
# RESPONSE MODELS (Server → Client)
# ============================================================================


class RenderResponse(BaseModel):
    """
    Converted model output.

    Attributes:
        text: Unwrapped text with image directives replaced by markdown
        directives: Number of image directives converted (0 when image
            output is not supported)
    """

    text: str
    directives: int


class SettingsResponse(BaseModel):
    """Public view of the active AGIML settings."""

    endpoint: str
    encode_params: bool
    supported_output_types: list[str]
    default_tools: list[str]
    spec_folder: str | None = None
    spec_name: str
