"""
Controller for the logo visualizer.
Uses the gateway's image operation; one image per request, no retries.
"""

from __future__ import annotations
from typing import Optional

from .errors import GatewayFailure, InvalidInput
from .models import ActionState, GeneratedImage
from .services.gateway import AIGateway

IMAGE_ERROR = "Failed to generate image. Please try again."


class VisualController:
    def __init__(self, gateway: AIGateway):
        self.gateway = gateway
        self.image: Optional[GeneratedImage] = None
        self.state = ActionState()

    def generate(self, concept: str) -> Optional[GeneratedImage]:
        """Generates a logo concept for the described business."""
        if not (concept or "").strip() or self.state.is_loading:
            return None
        self.state.start()
        self.image = None
        try:
            self.image = self.gateway.generate_image(concept)
        except InvalidInput as e:
            self.state.fail(e.user_message)
            return None
        except GatewayFailure:
            self.state.fail(IMAGE_ERROR)
            return None
        self.state.succeed()
        return self.image
