"""Ollama backed LLM client with streaming responses."""
from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator, Sequence
from typing import Any

import httpx

from ...config import LLMSettings
from .base import SYSTEM_PROMPT, LLMClient, stream_chunks

LOGGER = logging.getLogger(__name__)


class OllamaClient(LLMClient):
    """Stream completions from an Ollama server's NDJSON generate endpoint."""

    def __init__(self, settings: LLMSettings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._host = settings.ollama_host.rstrip("/")
        self.model_name = settings.ollama_model
        self._timeout = settings.request_timeout
        self._transport = transport

    async def generate(self, prompt: str, *, context: Sequence[str] | None = None) -> AsyncGenerator[str, None]:
        payload = {
            "model": self.model_name,
            "system": SYSTEM_PROMPT,
            "prompt": self.build_user_prompt(prompt, context),
            "stream": True,
            "options": {"temperature": 0.1, "top_p": 0.9},
        }
        LOGGER.info(
            "Ollama request started | model=%s context_chunks=%d prompt_chars=%d",
            self.model_name,
            len(context or []),
            len(prompt),
        )
        async for chunk in stream_chunks(
            "Ollama",
            f"{self._host}/api/generate",
            payload,
            self._parse_chunk,
            model_name=self.model_name,
            request_timeout=self._timeout,
            transport=self._transport,
        ):
            yield chunk

    @staticmethod
    def _parse_chunk(payload: str) -> str:
        try:
            data: dict[str, Any] = json.loads(payload)
        except json.JSONDecodeError:
            return ""
        if data.get("done"):
            return ""
        chunk = data.get("response")
        return str(chunk) if chunk else ""


__all__ = ["OllamaClient"]
