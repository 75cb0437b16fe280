"""Read-only view over the signed-in user's saved ideas, name lists and chat."""

from __future__ import annotations

from .controller_analysis import AnalysisController
from .models import AppHistory, StartupCost, User
from .persistence.history_store import HistoryStore
from .services.gateway import AIGateway

COST_COLORS = {
    StartupCost.LOW.value: "green",
    StartupCost.MEDIUM.value: "orange",
    StartupCost.HIGH.value: "red",
}
DEFAULT_COST_COLOR = "gray"


def cost_color(startup_cost: str) -> str:
    return COST_COLORS.get(startup_cost, DEFAULT_COST_COLOR)


class HistoryController:
    def __init__(self, gateway: AIGateway, history: HistoryStore, user: User):
        self.store = history
        self.user = user
        self.history = AppHistory()
        self.analysis = AnalysisController(gateway)
        self.refresh()

    def refresh(self) -> AppHistory:
        self.history = self.store.get_history(self.user.email)
        return self.history

    @property
    def has_chat(self) -> bool:
        # The first message is always the advisor greeting.
        return len(self.history.chat_history) > 1

    @property
    def has_history(self) -> bool:
        return bool(
            self.history.saved_ideas or self.history.saved_name_lists or self.has_chat
        )
