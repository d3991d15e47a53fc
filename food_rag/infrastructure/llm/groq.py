"""Groq client streaming via its OpenAI compatible REST API."""
from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator, Sequence

import httpx

from ...config import LLMSettings
from .base import SYSTEM_PROMPT, LLMClient, stream_chunks

LOGGER = logging.getLogger(__name__)

_SSE_PREFIX = "data:"
_SSE_DONE = "[DONE]"


class GroqClient(LLMClient):
    """Stream chat completions from Groq's hosted models."""

    def __init__(self, settings: LLMSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        if not settings.groq_api_key:
            raise ValueError("A Groq API key is required")
        self._api_key = settings.groq_api_key
        self._base_url = settings.groq_base_url.rstrip("/")
        self.model_name = settings.groq_model
        self._timeout = settings.request_timeout
        self._transport = transport

    async def generate(self, prompt: str, *, context: Sequence[str] | None = None) -> AsyncGenerator[str, None]:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": self.build_user_prompt(prompt, context)},
        ]
        payload = {
            "model": self.model_name,
            "messages": messages,
            "stream": True,
            "temperature": 0.1,
            "top_p": 0.9,
        }
        LOGGER.info("Groq request started | model=%s context_chunks=%d", self.model_name, len(context or []))
        async for chunk in stream_chunks(
            "Groq",
            f"{self._base_url}/chat/completions",
            payload,
            self._parse_line,
            model_name=self.model_name,
            request_timeout=self._timeout,
            headers={"Authorization": f"Bearer {self._api_key}"},
            transport=self._transport,
        ):
            yield chunk

    @staticmethod
    def _parse_line(line: str) -> str:
        """Return the content delta of one server-sent event line."""

        if not line.startswith(_SSE_PREFIX):
            return ""
        data = line[len(_SSE_PREFIX) :].strip()
        if not data or data == _SSE_DONE:
            return ""
        try:
            event = json.loads(data)
        except json.JSONDecodeError:
            return ""
        choices = event.get("choices") or []
        if not choices:
            return ""
        delta = (choices[0] or {}).get("delta") or {}
        text = delta.get("content")
        return str(text) if text else ""


__all__ = ["GroqClient"]
