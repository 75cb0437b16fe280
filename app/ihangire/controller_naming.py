"""Controller for the name generator: brainstorm names and save the list once per concept."""

from __future__ import annotations

from .errors import GatewayFailure, InvalidInput
from .models import ActionState, SavedNameList, User
from .persistence.history_store import HistoryStore
from .services.gateway import AIGateway

NAMING_ERROR = "Failed to generate names. Please try again."


class NamingController:
    def __init__(self, gateway: AIGateway, history: HistoryStore, user: User):
        self.gateway = gateway
        self.history = history
        self.user = user
        self.concept: str = ""
        self.names: list[str] = []
        self.list_saved = False
        self.state = ActionState()

    def generate(self, concept: str) -> bool:
        concept = (concept or "").strip()
        if not concept or self.state.is_loading:
            return False
        self.state.start()
        self.concept = concept
        self.names = []
        self.list_saved = False
        try:
            self.names = self.gateway.generate_names(concept)
        except InvalidInput as e:
            self.state.fail(e.user_message)
            return False
        except GatewayFailure:
            self.state.fail(NAMING_ERROR)
            return False
        self.state.succeed()
        return True

    @property
    def is_list_saved(self) -> bool:
        """True once saved here, or when this concept already has a saved list."""
        if self.list_saved:
            return True
        return bool(self.concept) and self.history.is_name_list_saved(
            self.concept, self.user.email
        )

    def save_list(self) -> bool:
        if not self.names or not self.concept or self.is_list_saved:
            return False
        self.list_saved = self.history.save_name_list(
            SavedNameList(concept=self.concept, names=self.names), self.user.email
        )
        return self.list_saved
