"""
Purpose: Thin client wrapper around OpenAI.
One place for auth, model options, response/usage normalization.

Surfaces:
- chat: one request/response completion.
- chat_stream: the same call with stream=True, yielding text fragments.
- search_chat: Responses API with the web-search tool; returns url citations.
- image_generate: Images API.

No retries here: failures go straight to the caller, which shows an error and
lets the user try again.

Testing: Mock SDK calls; assert it maps usage and citations correctly.
"""

from __future__ import annotations
import base64
from typing import Iterator, Optional

from openai import OpenAI

from ..models import GroundingSource, LLMSettings
from ..utils.logging import get_logger

logger = get_logger(__name__)


class OpenAILLMClient:
    def __init__(self, api_key: str, client: Optional[OpenAI] = None):
        self.api_key = api_key
        if not self.api_key:
            raise RuntimeError("Missing OPENAI_API_KEY")
        self.client = client or OpenAI(api_key=self.api_key)

    @staticmethod
    def _payload(
        messages: list[dict[str, str]], system: Optional[str]
    ) -> list[dict[str, str]]:
        payload = []
        if system:
            payload.append({"role": "system", "content": system})
        payload.extend({"role": m["role"], "content": m["content"]} for m in messages)
        return payload

    def chat(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> tuple[str, dict]:
        cc = self.client.chat.completions.create(
            model=settings.model,
            messages=self._payload(messages, system),
            temperature=settings.temperature,
            top_p=settings.top_p,
            max_tokens=settings.max_tokens,
            frequency_penalty=settings.frequency_penalty,
            presence_penalty=settings.presence_penalty,
        )
        text = cc.choices[0].message.content or ""
        usage = getattr(cc, "usage", None)
        return text, {
            "model": cc.model,
            "tokens_in": getattr(usage, "prompt_tokens", 0) if usage else 0,
            "tokens_out": getattr(usage, "completion_tokens", 0) if usage else 0,
        }

    def chat_stream(
        self,
        messages: list[dict[str, str]],
        settings: LLMSettings,
        system: Optional[str] = None,
    ) -> Iterator[str]:
        stream = self.client.chat.completions.create(
            model=settings.model,
            messages=self._payload(messages, system),
            temperature=settings.temperature,
            top_p=settings.top_p,
            max_tokens=settings.max_tokens,
            stream=True,
        )
        for chunk in stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta.content
            if delta:
                yield delta

    def search_chat(
        self, messages: list[dict[str, str]], settings: LLMSettings
    ) -> tuple[str, list[GroundingSource], dict]:
        resp = self.client.responses.create(
            model=settings.model,
            input=self._payload(messages, None),
            tools=[{"type": "web_search_preview"}],
            max_output_tokens=settings.max_tokens,
        )
        text = getattr(resp, "output_text", None) or ""
        usage = getattr(resp, "usage", None)
        meta = {
            "model": getattr(resp, "model", settings.model),
            "tokens_in": getattr(usage, "input_tokens", 0) if usage else 0,
            "tokens_out": getattr(usage, "output_tokens", 0) if usage else 0,
        }
        return text, _collect_citations(resp), meta

    def image_generate(
        self, *, prompt: str, model: str, size: str = "1024x1024", n: int = 1
    ):
        """Generate images from a text prompt. Returns (payload, meta)."""
        resp = self.client.images.generate(model=model, prompt=prompt, size=size, n=n)

        url = getattr(resp.data[0], "url", None)
        b64 = getattr(resp.data[0], "b64_json", None)
        meta = {"model": model, "tokens_in": len(prompt.split())}

        if b64:
            return {"kind": "bytes", "data": base64.b64decode(b64), "format": "PNG"}, meta
        if url:
            return {"kind": "url", "data": url}, meta

        logger.warning("Image API returned neither bytes nor url (model=%s)", model)
        return {"kind": "none", "data": None}, meta


def _collect_citations(resp) -> list[GroundingSource]:
    """Pull url_citation annotations out of a Responses API result, de-duplicated by uri."""
    sources: list[GroundingSource] = []
    seen: set[str] = set()
    for item in getattr(resp, "output", None) or []:
        if getattr(item, "type", None) != "message":
            continue
        for part in getattr(item, "content", None) or []:
            for ann in getattr(part, "annotations", None) or []:
                if getattr(ann, "type", None) != "url_citation":
                    continue
                uri = getattr(ann, "url", "") or ""
                if not uri or uri in seen:
                    continue
                seen.add(uri)
                sources.append(GroundingSource(uri=uri, title=getattr(ann, "title", "") or uri))
    return sources
