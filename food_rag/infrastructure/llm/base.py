"""LLM client base classes."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncGenerator, Callable, Sequence
from time import perf_counter
from typing import Any

import httpx

LOGGER = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a helpful assistant that answers questions about food. Use the numbered context snippets to "
    "answer and cite them inline as [1], [2]. If the context does not contain the answer, say that you "
    "could not find it in the food database instead of guessing. Keep answers short and concrete."
)


class LLMClient(ABC):
    """Abstract LLM interface supporting streaming responses."""

    model_name: str

    @abstractmethod
    def generate(self, prompt: str, *, context: Sequence[str] | None = None) -> AsyncGenerator[str, None]:
        """Yield response chunks for the given prompt."""

    @staticmethod
    def build_user_prompt(prompt: str, context: Sequence[str] | None) -> str:
        if not context:
            return f"Question:\n{prompt}"
        context_block = "\n\n".join(context)
        return f"Context:\n{context_block}\n\nQuestion:\n{prompt}"


async def stream_chunks(
    provider: str,
    url: str,
    payload: dict[str, Any],
    parse_line: Callable[[str], str],
    *,
    model_name: str,
    request_timeout: float,
    headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AsyncGenerator[str, None]:
    """POST ``payload`` and yield the non-empty text ``parse_line`` finds in each response line.

    HTTP failures surface as ``RuntimeError`` naming ``provider``.
    """

    timeout = httpx.Timeout(request_timeout, connect=request_timeout, read=None, write=request_timeout)
    start_time = perf_counter()
    chunk_count = 0
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            async with client.stream("POST", url, json=payload, headers=headers) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line:
                        continue
                    chunk = parse_line(line)
                    if chunk:
                        chunk_count += 1
                        yield chunk
    except httpx.HTTPStatusError as exc:
        raise RuntimeError(f"{provider} generation failed with status {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise RuntimeError(f"Failed to reach {provider} at {url}: {exc}") from exc
    finally:
        LOGGER.info(
            "LLM request finished | provider=%s model=%s duration=%.2fs chunks=%d",
            provider,
            model_name,
            perf_counter() - start_time,
            chunk_count,
        )


__all__ = ["LLMClient", "SYSTEM_PROMPT", "stream_chunks"]
