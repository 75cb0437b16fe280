"""
Abstractions for pluggable services. Inversion of control: the core depends
on interfaces, not concrete services, which enables fakes in tests.

Common protocols:
- LLMClient.chat / chat_stream / search_chat / image_generate
- PromptFactory: one builder per gateway operation
- KeyValueStorage: string-keyed, string-valued local persistence

Testing: Use simple fake implementations to test controllers without network calls.
"""

from __future__ import annotations
from typing import Iterator, Optional, Protocol

from .models import BusinessIdea, GroundingSource, LLMSettings


class LLMClient(Protocol):
    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]: ...

    def chat_stream(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> Iterator[str]: ...

    def search_chat(
        self, messages: list[dict[str, str]], settings: LLMSettings
    ) -> tuple[str, list[GroundingSource], dict]: ...

    def image_generate(
        self, *, prompt: str, model: str, size: str = "1024x1024", n: int = 1
    ): ...


class PromptFactory(Protocol):
    def discovery_instruction(self, *, location_query: str) -> str: ...

    def analysis_instruction(self, *, idea: BusinessIdea) -> str: ...

    def naming_instruction(self, *, concept: str) -> str: ...

    def advisor_system(self) -> str: ...

    def logo_prompt(self, *, concept: str) -> str: ...


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...
