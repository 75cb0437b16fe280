"""
Purpose: The AI Gateway. Shapes requests for the generative backend and parses
its replies into app models.

Operations:
- discover_ideas(location_query) -> IdeaDiscovery (ideas + grounding sources)
- analyze_idea(idea) -> sectioned markdown text
- generate_names(concept) -> list[str]
- stream_chat(message) -> lazy iterator of text fragments
- generate_image(concept) -> GeneratedImage

Every transport or parsing failure leaves this module as GatewayFailure, with
one exception: an unparseable idea-discovery reply degrades to a single
synthetic "parse error" idea instead of raising. Nothing here retries.
"""

from __future__ import annotations
from typing import Iterator, Optional

from ..config import Settings
from ..errors import GatewayFailure
from ..interfaces import LLMClient, PromptFactory
from ..models import (
    BusinessIdea,
    ChatMessage,
    GeneratedImage,
    IdeaDiscovery,
    LLMSettings,
    Sender,
)
from ..prompts import DefaultPromptFactory
from ..utils.llm_json import require_array
from ..utils.logging import get_logger
from .security import DefaultSecurity

logger = get_logger(__name__)

PARSE_ERROR_NAME = "AI Response Error"
PARSE_ERROR_COST = "N/A"


def parse_error_idea(raw_text: str) -> BusinessIdea:
    return BusinessIdea(
        name=PARSE_ERROR_NAME,
        concept=f"Could not parse the AI's response. Raw output:\n\n{raw_text}",
        startup_cost=PARSE_ERROR_COST,
    )


def is_parse_error(idea: BusinessIdea) -> bool:
    return idea.name == PARSE_ERROR_NAME and idea.startup_cost == PARSE_ERROR_COST


def parse_ideas(text: str) -> list[BusinessIdea]:
    """Parse the discovery reply; any shape problem yields the synthetic error idea."""
    try:
        items = require_array(text)
        if not all(isinstance(item, dict) for item in items):
            raise ValueError("Expected an array of objects.")
    except ValueError as e:
        logger.warning("Failed to parse business ideas JSON: %s", e)
        return [parse_error_idea(text)]
    return [BusinessIdea.from_dict(item) for item in items]


def _to_turn(message: ChatMessage) -> dict[str, str]:
    role = "assistant" if message.sender == Sender.BOT else "user"
    return {"role": role, "content": message.text}


class ChatSession:
    """One advisor conversation. Keeps the turns the backend needs for context."""

    def __init__(
        self,
        llm: LLMClient,
        settings: LLMSettings,
        system: str,
        history: Optional[list[ChatMessage]] = None,
    ):
        self.llm = llm
        self.settings = settings
        self.system = system
        self.turns: list[dict[str, str]] = [
            _to_turn(m) for m in (history or []) if m.text
        ]

    def send_stream(self, message: str) -> Iterator[str]:
        """Yield reply fragments in arrival order; partial replies stay in context."""
        self.turns.append({"role": "user", "content": message})
        received: list[str] = []
        try:
            for fragment in self.llm.chat_stream(
                self.turns[:], self.settings, system=self.system
            ):
                received.append(fragment)
                yield fragment
        except Exception as e:
            logger.error("Chat stream failed after %d fragment(s): %s", len(received), e)
            raise GatewayFailure("stream_chat", e) from e
        finally:
            if received:
                self.turns.append({"role": "assistant", "content": "".join(received)})
            else:
                self.turns.pop()


class AIGateway:
    def __init__(
        self,
        llm: LLMClient,
        *,
        text_model: str = "gpt-4o-mini",
        analysis_model: str = "gpt-4o",
        image_model: str = "gpt-image-1",
    ):
        self.llm: LLMClient = llm
        self.prompts: PromptFactory = DefaultPromptFactory()
        self.security = DefaultSecurity()
        self.text_model = text_model
        self.analysis_model = analysis_model
        self.image_model = image_model
        self._chat: Optional[ChatSession] = None

    @classmethod
    def from_settings(cls, llm: LLMClient, settings: Settings) -> "AIGateway":
        return cls(
            llm,
            text_model=settings.text_model,
            analysis_model=settings.analysis_model,
            image_model=settings.image_model,
        )

    def discover_ideas(self, location_query: str) -> IdeaDiscovery:
        query = self.security.validate_user_input(location_query)
        prompt = self.prompts.discovery_instruction(location_query=query)
        settings = LLMSettings(model=self.text_model, temperature=0.8, max_tokens=1500)
        try:
            text, sources, _meta = self.llm.search_chat(
                [{"role": "user", "content": prompt}], settings
            )
        except Exception as e:
            logger.error("Idea discovery failed for %r: %s", query, e)
            raise GatewayFailure("discover_ideas", e) from e
        return IdeaDiscovery(ideas=parse_ideas(text), sources=sources)

    def analyze_idea(self, idea: BusinessIdea) -> str:
        prompt = self.prompts.analysis_instruction(idea=idea)
        settings = LLMSettings(model=self.analysis_model, temperature=0.7, max_tokens=4000)
        try:
            text, _meta = self.llm.chat([{"role": "user", "content": prompt}], settings)
        except Exception as e:
            logger.error("Analysis failed for %r: %s", idea.name, e)
            raise GatewayFailure("analyze_idea", e) from e
        return text

    def generate_names(self, concept: str) -> list[str]:
        clean = self.security.validate_user_input(concept)
        prompt = self.prompts.naming_instruction(concept=clean)
        settings = LLMSettings(model=self.text_model, temperature=0.9, max_tokens=600)
        try:
            text, _meta = self.llm.chat([{"role": "user", "content": prompt}], settings)
            names = require_array(text, "Expected a JSON array of names.")
        except Exception as e:
            logger.error("Name generation failed for %r: %s", clean, e)
            raise GatewayFailure("generate_names", e) from e
        return [str(n) for n in names]

    def start_chat(self, history: Optional[list[ChatMessage]] = None) -> ChatSession:
        settings = LLMSettings(model=self.text_model, temperature=0.7, max_tokens=1024)
        return ChatSession(self.llm, settings, self.prompts.advisor_system(), history)

    def stream_chat(
        self, message: str, *, session: Optional[ChatSession] = None
    ) -> Iterator[str]:
        """Stream a reply; without an explicit session, one gateway-wide session is used."""
        clean = self.security.validate_user_input(message)
        if session is None:
            if self._chat is None:
                self._chat = self.start_chat()
            session = self._chat
        return session.send_stream(clean)

    def generate_image(self, concept: str) -> GeneratedImage:
        clean = self.security.validate_user_input(concept)
        prompt = self.prompts.logo_prompt(concept=clean)
        try:
            payload, _meta = self.llm.image_generate(
                prompt=prompt, model=self.image_model, size="1024x1024", n=1
            )
        except Exception as e:
            logger.error("Image generation failed: %s", e)
            raise GatewayFailure("generate_image", e) from e

        kind = payload.get("kind")
        if kind == "bytes" and payload.get("data"):
            fmt = str(payload.get("format", "PNG")).lower()
            return GeneratedImage(mime_type=f"image/{fmt}", data=payload["data"])
        if kind == "url" and payload.get("data"):
            return GeneratedImage(mime_type="image/png", url=payload["data"])
        raise GatewayFailure("generate_image", ValueError("No image received from generator."))
