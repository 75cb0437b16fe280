"""
Controller for idea discovery: location search, grounding sources, the
analysis panel, and saving ideas to the user's history without duplicates.
"""

from __future__ import annotations

from .controller_analysis import AnalysisController
from .errors import GatewayFailure, InvalidInput
from .models import ActionState, BusinessIdea, GroundingSource, User
from .persistence.history_store import HistoryStore
from .services.gateway import AIGateway, is_parse_error

SEARCH_ERROR = "Failed to fetch business ideas. Please try again."


def coordinates_query(latitude: float, longitude: float) -> str:
    return f"latitude {latitude:.5f}, longitude {longitude:.5f}"


class IdeasController:
    def __init__(self, gateway: AIGateway, history: HistoryStore, user: User):
        self.gateway = gateway
        self.history = history
        self.user = user
        self.ideas: list[BusinessIdea] = []
        self.sources: list[GroundingSource] = []
        self.state = ActionState()
        self.analysis = AnalysisController(gateway)

    def search(self, location_query: str) -> bool:
        """Fetch ideas for a place. Blank input or an in-flight search is ignored."""
        if not (location_query or "").strip() or self.state.is_loading:
            return False
        self.state.start()
        self.ideas = []
        self.sources = []
        try:
            result = self.gateway.discover_ideas(location_query)
        except InvalidInput as e:
            self.state.fail(e.user_message)
            return False
        except GatewayFailure:
            self.state.fail(SEARCH_ERROR)
            return False
        self.ideas = result.ideas
        self.sources = result.sources
        self.state.succeed()
        return True

    def search_near(self, latitude: float, longitude: float) -> bool:
        return self.search(coordinates_query(latitude, longitude))

    def is_saved(self, idea: BusinessIdea) -> bool:
        return self.history.is_idea_saved(idea, self.user.email)

    def can_save(self, idea: BusinessIdea) -> bool:
        return not is_parse_error(idea) and not self.is_saved(idea)

    def save(self, idea: BusinessIdea) -> bool:
        if not self.can_save(idea):
            return False
        return self.history.save_idea(idea, self.user.email)
