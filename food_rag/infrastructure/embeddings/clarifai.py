"""Embedding client calling the Clarifai model outputs REST API."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import urlparse

import httpx

from .base import EmbeddingClient

LOGGER = logging.getLogger(__name__)

CLARIFAI_API_BASE = "https://api.clarifai.com/v2"


def parse_model_url(model_url: str) -> tuple[str, str, str]:
    """Split ``https://clarifai.com/<user>/<app>/models/<model>`` into its ids."""

    parts = [part for part in urlparse(model_url).path.split("/") if part]
    if len(parts) < 4 or parts[2] != "models":
        raise ValueError(f"Unrecognised Clarifai model URL: {model_url!r}")
    return parts[0], parts[1], parts[3]


class ClarifaiEmbeddingClient(EmbeddingClient):
    """Generate embeddings with a hosted Clarifai text embedding model."""

    def __init__(
        self,
        *,
        pat: str,
        model_url: str,
        dimension: int,
        request_timeout: int = 60,
        api_base: str = CLARIFAI_API_BASE,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        user_id, app_id, model_id = parse_model_url(model_url)
        self.model_name = model_id
        self.dimension = dimension
        self._pat = pat
        self._url = f"{api_base.rstrip('/')}/users/{user_id}/apps/{app_id}/models/{model_id}/outputs"
        self._timeout = request_timeout
        self._transport = transport

    async def embed(self, texts: Sequence[str]) -> list[list[float]]:
        if not texts:
            return []
        payload = {"inputs": [{"data": {"text": {"raw": text}}} for text in texts]}
        headers = {"Authorization": f"Key {self._pat}", "Content-Type": "application/json"}
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self._url, json=payload, headers=headers)
                response.raise_for_status()
                data: dict[str, Any] = response.json()
        except httpx.HTTPStatusError as exc:
            raise RuntimeError(
                f"Clarifai embedding failed with status {exc.response.status_code}: {exc.response.text}"
            ) from exc
        except httpx.HTTPError as exc:
            raise RuntimeError(f"Failed to reach Clarifai at {self._url}: {exc}") from exc

        outputs = data.get("outputs") or []
        if len(outputs) != len(texts):
            raise RuntimeError("Unexpected response format from Clarifai outputs endpoint")
        vectors: list[list[float]] = []
        for output in outputs:
            embeddings = ((output or {}).get("data") or {}).get("embeddings") or []
            if not embeddings:
                raise RuntimeError("Clarifai output did not contain an embedding")
            vectors.append(self._validated(embeddings[0].get("vector") or []))
        LOGGER.debug("Clarifai embeddings | model=%s texts=%d", self.model_name, len(texts))
        return vectors


__all__ = ["ClarifaiEmbeddingClient", "parse_model_url"]
