"""
Canonical data shapes, shared truth for typing/validation between layers.

Typical contents:
- User (identified by email only).
- BusinessIdea, SavedNameList, ChatMessage and the AppHistory bundle.
- GroundingSource (citation returned with idea discovery).
- LLMSettings (model, temperature, top_p, max_tokens).
- ActionState, the idle/loading/success/error tracker each view action owns.

Serialization helpers keep the stored JSON keys (camelCase) stable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
from enum import Enum
import base64


class StartupCost(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Sender(str, Enum):
    USER = "user"
    BOT = "bot"


class AuthProvider(str, Enum):
    GOOGLE = "google"
    GITHUB = "github"


class ViewStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class BlockKind(str, Enum):
    HEADING_2 = "h2"
    HEADING_3 = "h3"
    BOLD = "bold"
    BULLET = "bullet"
    PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class User:
    email: str


@dataclass(frozen=True)
class BusinessIdea:
    name: str
    concept: str
    startup_cost: str

    def same_as(self, other: "BusinessIdea") -> bool:
        """Ideas are considered equal when name and concept both match."""
        return self.name == other.name and self.concept == other.concept

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "concept": self.concept,
            "startupCost": self.startup_cost,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "BusinessIdea":
        return cls(
            name=str(data.get("name") or ""),
            concept=str(data.get("concept") or ""),
            startup_cost=str(data.get("startupCost") or ""),
        )


@dataclass
class SavedNameList:
    concept: str
    names: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"concept": self.concept, "names": list(self.names)}

    @classmethod
    def from_dict(cls, data: dict) -> "SavedNameList":
        names = data.get("names") or []
        return cls(
            concept=str(data.get("concept") or ""),
            names=[str(n) for n in names] if isinstance(names, list) else [],
        )


@dataclass
class ChatMessage:
    sender: Sender
    text: str

    def to_dict(self) -> dict:
        return {"sender": self.sender.value, "text": self.text}

    @classmethod
    def from_dict(cls, data: dict) -> "ChatMessage":
        return cls(sender=Sender(data.get("sender")), text=str(data.get("text") or ""))


@dataclass
class AppHistory:
    saved_ideas: list[BusinessIdea] = field(default_factory=list)
    saved_name_lists: list[SavedNameList] = field(default_factory=list)
    chat_history: list[ChatMessage] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "savedIdeas": [i.to_dict() for i in self.saved_ideas],
            "savedNameLists": [n.to_dict() for n in self.saved_name_lists],
            "chatHistory": [m.to_dict() for m in self.chat_history],
        }


@dataclass(frozen=True)
class GroundingSource:
    uri: str
    title: str


@dataclass
class IdeaDiscovery:
    ideas: list[BusinessIdea]
    sources: list[GroundingSource] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisBlock:
    kind: BlockKind
    text: str


@dataclass
class GeneratedImage:
    mime_type: str
    data: Optional[bytes] = None
    url: Optional[str] = None

    @property
    def data_url(self) -> str:
        """Display-ready source: the remote URL, or the bytes inlined as base64."""
        if self.url:
            return self.url
        encoded = base64.b64encode(self.data or b"").decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


@dataclass
class ActionState:
    status: ViewStatus = ViewStatus.IDLE
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.status == ViewStatus.LOADING

    def start(self) -> None:
        self.status = ViewStatus.LOADING
        self.error = None

    def succeed(self) -> None:
        self.status = ViewStatus.SUCCESS
        self.error = None

    def fail(self, message: str) -> None:
        self.status = ViewStatus.ERROR
        self.error = message


@dataclass
class LLMSettings:
    model: str
    temperature: float = 0.7
    top_p: float = 1.0
    max_tokens: int = 1024
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0
