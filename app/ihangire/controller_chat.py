"""
Purpose: The advisor chat. Owns the transcript and the backend conversation.

Key responsibilities:
- Hydrate the transcript from the user's history (or start with the greeting).
- send(): append the user message plus ONE bot placeholder, then grow that
  placeholder fragment by fragment, in arrival order.
- On failure keep whatever already arrived; if nothing did, show the apology.
- An interrupted stream keeps its partial text and leaves the state idle.
- Persist the transcript after every turn (full replace).
- Reject a new send while a reply is still streaming.

Testing: Fake LLM client yielding scripted fragments or raising mid-stream.
"""

from __future__ import annotations
from typing import Iterator, Optional

from .errors import GatewayFailure, InvalidInput
from .models import ActionState, ChatMessage, Sender, User
from .persistence.history_store import HistoryStore
from .prompts.advisor import APOLOGY, CONVERSATION_STARTERS, GREETING
from .services.gateway import AIGateway, ChatSession
from .services.security import DefaultSecurity
from .utils.logging import get_logger

logger = get_logger(__name__)


class ChatController:
    def __init__(self, gateway: AIGateway, history: HistoryStore, user: User):
        self.gateway = gateway
        self.history = history
        self.user = user
        self.security = DefaultSecurity()
        self.state = ActionState()
        self.streaming = False
        self.messages: list[ChatMessage] = []
        self.session: Optional[ChatSession] = None
        self.hydrate()

    def hydrate(self) -> None:
        """Load the saved transcript and seed a fresh backend conversation with it."""
        saved = self.history.get_history(self.user.email).chat_history
        self.messages = saved or [ChatMessage(Sender.BOT, GREETING)]
        self.session = self.gateway.start_chat(self.messages)

    @property
    def starters(self) -> list[str]:
        """Conversation starters are offered only before the first exchange."""
        return list(CONVERSATION_STARTERS) if len(self.messages) == 1 else []

    def send(self, prompt: str) -> Iterator[str]:
        """
        Lazily run one chat turn, yielding fragments as they arrive.
        Blank input and sends during an active stream yield nothing and leave
        the transcript untouched.
        """
        if self.streaming:
            logger.warning("Chat send rejected: a reply is still streaming")
            return
        try:
            text = self.security.validate_user_input(prompt)
        except InvalidInput as e:
            if (prompt or "").strip():
                self.state.fail(e.user_message)
            return

        self.streaming = True
        self.state.start()
        self.messages.append(ChatMessage(Sender.USER, text))
        reply = ChatMessage(Sender.BOT, "")
        self.messages.append(reply)
        try:
            stream = self.gateway.stream_chat(text, session=self.session)
            for fragment in stream:
                reply.text += fragment
                yield fragment
            self.state.succeed()
        except GatewayFailure as e:
            logger.error("Chat error: %s", e)
            self.state.fail(APOLOGY)
            if not reply.text:
                reply.text = APOLOGY
                yield APOLOGY
        except GeneratorExit:
            # Consumer stopped reading (e.g. a rerun): keep the partial text,
            # but the turn neither succeeded nor failed.
            logger.info("Chat reply interrupted after %d chars", len(reply.text))
            stream.close()
            self.state = ActionState()
            raise
        finally:
            self.streaming = False
            self.history.save_chat_history(self.messages, self.user.email)

    def send_and_wait(self, prompt: str) -> str:
        """Run a whole turn and return the resulting bot text ('' if nothing was sent)."""
        return "".join(self.send(prompt))
