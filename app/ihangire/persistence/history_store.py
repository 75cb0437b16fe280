"""
Purpose: Per-user history bundle (saved ideas, saved name lists, chat
transcript) stored under `ihangire_history_<email>`.

Reads never fail: a missing or corrupted record degrades to empty lists.
Writes never crash the caller: storage failures are logged and the save
simply does not stick.

De-duplication rules:
- ideas: same (name, concept) pair
- name lists: same concept string (names are not compared)
- chat: no merge, every save replaces the whole transcript
"""

from __future__ import annotations
import json
from typing import Callable, TypeVar

from ..errors import StorageFailure
from ..interfaces import KeyValueStorage
from ..models import AppHistory, BusinessIdea, ChatMessage, SavedNameList
from ..utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def history_key(email: str) -> str:
    return f"ihangire_history_{email}"


def _load_list(raw, factory: Callable[[dict], T], label: str) -> list[T]:
    if not isinstance(raw, list):
        return []
    items: list[T] = []
    for entry in raw:
        try:
            if not isinstance(entry, dict):
                raise ValueError(f"not an object: {entry!r}")
            items.append(factory(entry))
        except ValueError as e:
            logger.warning("Skipping malformed %s entry: %s", label, e)
    return items


class HistoryStore:
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    def get_history(self, email: str) -> AppHistory:
        try:
            raw = self.storage.get_item(history_key(email))
            parsed = json.loads(raw) if raw else None
        except (ValueError, OSError) as e:
            logger.error("Failed to parse history for %s: %s", email, e)
            return AppHistory()
        if not isinstance(parsed, dict):
            return AppHistory()
        return AppHistory(
            saved_ideas=_load_list(
                parsed.get("savedIdeas"), BusinessIdea.from_dict, "idea"
            ),
            saved_name_lists=_load_list(
                parsed.get("savedNameLists"), SavedNameList.from_dict, "name list"
            ),
            chat_history=_load_list(
                parsed.get("chatHistory"), ChatMessage.from_dict, "chat message"
            ),
        )

    def _save_history(self, history: AppHistory, email: str) -> bool:
        try:
            self.storage.set_item(history_key(email), json.dumps(history.to_dict()))
        except (StorageFailure, OSError, TypeError, ValueError) as e:
            logger.error("Failed to save history for %s: %s", email, e)
            return False
        return True

    def save_idea(self, idea: BusinessIdea, email: str) -> bool:
        """Append unless already saved. True when the idea was newly persisted."""
        history = self.get_history(email)
        if any(i.same_as(idea) for i in history.saved_ideas):
            return False
        history.saved_ideas.append(idea)
        return self._save_history(history, email)

    def save_name_list(self, name_list: SavedNameList, email: str) -> bool:
        """Append unless a list for the same concept exists. True when newly persisted."""
        history = self.get_history(email)
        if any(n.concept == name_list.concept for n in history.saved_name_lists):
            return False
        history.saved_name_lists.append(
            SavedNameList(concept=name_list.concept, names=list(name_list.names))
        )
        return self._save_history(history, email)

    def save_chat_history(self, messages: list[ChatMessage], email: str) -> bool:
        history = self.get_history(email)
        history.chat_history = [ChatMessage(m.sender, m.text) for m in messages]
        return self._save_history(history, email)

    def is_idea_saved(self, idea: BusinessIdea, email: str) -> bool:
        return any(i.same_as(idea) for i in self.get_history(email).saved_ideas)

    def is_name_list_saved(self, concept: str, email: str) -> bool:
        return any(n.concept == concept for n in self.get_history(email).saved_name_lists)
