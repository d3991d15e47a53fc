"""Factory helpers for LLM clients."""
from __future__ import annotations

import logging

from ...config import Settings
from .base import LLMClient
from .groq import GroqClient
from .ollama import OllamaClient

LOGGER = logging.getLogger(__name__)


def create_llm_client(settings: Settings) -> LLMClient:
    """Create the answer-generating client selected by configuration."""

    if settings.llm.provider == "groq":
        if settings.llm.groq_api_key:
            return GroqClient(settings.llm)
        LOGGER.warning("Groq selected but LLM__GROQ_API_KEY is missing; falling back to Ollama")
    return OllamaClient(settings.llm)


__all__ = ["create_llm_client"]
