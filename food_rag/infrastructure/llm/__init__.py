"""LLM client exports."""

from .base import LLMClient
from .factory import create_llm_client
from .groq import GroqClient
from .ollama import OllamaClient

__all__ = ["LLMClient", "GroqClient", "OllamaClient", "create_llm_client"]
