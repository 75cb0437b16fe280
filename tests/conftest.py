"""
Shared fixtures: in-memory storage, a scripted fake LLM client, and a
signed-in user. Nothing here touches the network.
"""

import pytest

from ihangire.models import User
from ihangire.persistence.history_store import HistoryStore
from ihangire.persistence.local_storage import InMemoryStorage
from ihangire.services.auth import AuthService
from ihangire.services.gateway import AIGateway


class FakeLLM:
    """Scripted LLMClient. Queue entries that are exceptions get raised."""

    def __init__(self):
        self.replies = []
        self.fragments = []
        self.search_reply = ("[]", [])
        self.image_payload = {"kind": "bytes", "data": b"\x89PNG", "format": "PNG"}
        self.calls = []

    def chat(self, messages, settings, system=None):
        self.calls.append(("chat", messages, settings))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply, {"model": settings.model}

    def chat_stream(self, messages, settings, system=None):
        self.calls.append(("chat_stream", messages, settings, system))
        for fragment in self.fragments:
            if isinstance(fragment, Exception):
                raise fragment
            yield fragment

    def search_chat(self, messages, settings):
        self.calls.append(("search_chat", messages, settings))
        if isinstance(self.search_reply, Exception):
            raise self.search_reply
        text, sources = self.search_reply
        return text, sources, {"model": settings.model}

    def image_generate(self, *, prompt, model, size="1024x1024", n=1):
        self.calls.append(("image_generate", prompt, model))
        if isinstance(self.image_payload, Exception):
            raise self.image_payload
        return self.image_payload, {"model": model}


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def auth(storage):
    return AuthService(storage)


@pytest.fixture
def history(storage):
    return HistoryStore(storage)


@pytest.fixture
def llm():
    return FakeLLM()


@pytest.fixture
def gateway(llm):
    return AIGateway(llm)


@pytest.fixture
def user():
    return User(email="amina@example.com")
