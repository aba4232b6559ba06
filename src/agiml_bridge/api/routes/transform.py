"""AGIML transform endpoints.

Exposes the middleware's two pipeline hooks so chat pipelines that are not
written in Python can use the transform as a sidecar service:

``POST /agiml/before-request``
    Conversation in, conversation out with the specification injected and the user
    turn enveloped.

``POST /agiml/after-response``
    Conversation in, conversation out with the response converted.

``POST /agiml/render``
    Bare model output in, converted text out.

Handlers are synchronous; FastAPI runs them in its thread pool.  The
middleware holds no per-request state, so one instance serves all requests.
"""

import logging

from fastapi import APIRouter

from agiml_bridge.agiml.conversation import Conversation
from agiml_bridge.agiml.directives import IMAGE_TAG, find_directives
from agiml_bridge.agiml.envelope import unwrap_response
from agiml_bridge.agiml.middleware import AgimlMiddleware
from agiml_bridge.api.models import RenderRequest, RenderResponse, SettingsResponse

logger = logging.getLogger(__name__)


def router(middleware: AgimlMiddleware) -> APIRouter:
    """Build the transform router around a shared middleware instance."""
    api = APIRouter(prefix="/agiml")

    @api.get("/settings", response_model=SettingsResponse)
    def get_settings():
        """Return the active settings (unknown options omitted)."""
        return SettingsResponse(**middleware.settings.public_view())

    @api.post("/before-request", response_model=Conversation)
    def before_request(conversation: Conversation):
        """Prepare an outbound turn."""
        return middleware.before_request(conversation)

    @api.post("/after-response", response_model=Conversation)
    def after_response(conversation: Conversation):
        """Convert an inbound turn."""
        return middleware.after_response(conversation)

    @api.post("/render", response_model=RenderResponse)
    def render(request: RenderRequest):
        """Convert bare model output and count the directives converted."""
        count = 0
        if middleware.settings.supports(IMAGE_TAG):
            count = len(find_directives(unwrap_response(request.text)))
        text = middleware.process_response(request.text)
        logger.debug("Rendered response with %d directive(s)", count)
        return RenderResponse(text=text, directives=count)

    return api
