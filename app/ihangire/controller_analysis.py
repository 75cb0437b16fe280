"""Deep-dive analysis of one idea, shared by the Ideas and History views."""

from __future__ import annotations
from typing import Optional

from .errors import GatewayFailure
from .models import ActionState, AnalysisBlock, BusinessIdea
from .services.gateway import AIGateway
from .utils.analysis_blocks import parse_blocks

ANALYSIS_ERROR = "Failed to get analysis. Please try again."


class AnalysisController:
    def __init__(self, gateway: AIGateway):
        self.gateway = gateway
        self.idea: Optional[BusinessIdea] = None
        self.text: str = ""
        self.state = ActionState()

    @property
    def is_open(self) -> bool:
        return self.idea is not None

    @property
    def blocks(self) -> list[AnalysisBlock]:
        return parse_blocks(self.text)

    def open(self, idea: BusinessIdea) -> Optional[str]:
        """Select the idea and fetch its analysis. Returns the text, or None on error."""
        self.idea = idea
        self.text = ""
        self.state.start()
        try:
            self.text = self.gateway.analyze_idea(idea)
        except GatewayFailure:
            self.state.fail(ANALYSIS_ERROR)
            return None
        self.state.succeed()
        return self.text

    def close(self) -> None:
        self.idea = None
        self.text = ""
        self.state = ActionState()
