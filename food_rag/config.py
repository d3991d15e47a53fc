"""Application configuration objects based on Pydantic settings."""
from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

LOGGER = logging.getLogger(__name__)

COLLECTION_NAME = "foods"
DEFAULT_RAG_RESULTS = 3


class FastAPISettings(BaseModel):
    """Settings that control FastAPI specific behaviour."""

    title: str = "Food RAG"
    description: str = "Ask questions about a small food dataset."
    version: str = "0.1.0"
    docs_url: str | None = "/docs"
    redoc_url: str | None = "/redoc"
    openapi_url: str = "/openapi.json"
    host: str = "0.0.0.0"
    port: int = 8000
    cors_allow_origins: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default_factory=lambda: ["*"])
    cors_allow_headers: list[str] = Field(default_factory=lambda: ["*"])
    gzip_minimum_size: int = 1024
    enable_console: bool = True
    console_path: str = "/console"


class VectorStoreSettings(BaseModel):
    """Vector database selection and backend specific parameters."""

    backend: Literal["memory", "chroma", "upstash"] = "upstash"
    collection_name: str = COLLECTION_NAME
    snapshot_path: Path | None = Path("simple_vector_db.json")
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    upstash_url: str | None = None
    upstash_token: str | None = None
    upstash_id_listing_limit: int = 100
    retry_attempts: int = Field(default=3, ge=1)
    retry_base_delay: float = Field(default=1.0, ge=0.0)
    operation_timeout: float | None = Field(default=30.0, gt=0.0)


class EmbeddingSettings(BaseModel):
    """Embedding provider configuration."""

    provider: Literal["ollama", "clarifai", "local"] = "ollama"
    model: str = "mxbai-embed-large"
    dimension: int | None = Field(
        default=None,
        gt=0,
        description="Vector length produced by the model. Derived from the model name when omitted.",
    )
    ollama_host: str = "http://localhost:11434"
    clarifai_pat: str | None = None
    clarifai_model_url: str | None = None
    request_timeout: int = 60


class LLMSettings(BaseModel):
    """LLM provider configuration for Ollama and Groq."""

    provider: Literal["ollama", "groq"] = "ollama"
    ollama_host: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"
    groq_api_key: str | None = None
    groq_model: str = "llama-3.2-3b-preview"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    request_timeout: int = 60


class RAGSettings(BaseModel):
    """Retrieval defaults and dataset location."""

    default_results: int = Field(default=DEFAULT_RAG_RESULTS, ge=1)
    max_results: int = Field(default=20, ge=1)
    dataset_path: Path = Path(__file__).resolve().parents[1] / "data" / "foods.json"


class LoggingSettings(BaseModel):
    """Where and how verbosely to log."""

    level: str = "INFO"
    directory: Path = Path("logs")


class Settings(BaseSettings):
    """Aggregate settings for the application."""

    environment: Literal["development", "production", "test"] = "development"
    fastapi: FastAPISettings = Field(default_factory=FastAPISettings)
    vector_store: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    embeddings: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    rag: RAGSettings = Field(default_factory=RAGSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(env_file=".env", env_nested_delimiter="__", case_sensitive=False)

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache()
def load_settings() -> Settings:
    """Load application settings with caching.

    Invalid configuration is fatal: the validation error is logged and
    re-raised as :class:`ConfigurationError` so start-up stops.
    """

    try:
        settings = Settings()
    except ValidationError as exc:
        LOGGER.error("Invalid environment configuration: %s", exc)
        raise ConfigurationError("Invalid environment configuration", cause=exc) from exc
    if settings.is_development:
        LOGGER.info(
            "Configuration loaded | vector_store=%s embeddings=%s llm=%s",
            settings.vector_store.backend,
            settings.embeddings.provider,
            settings.llm.provider,
        )
    return settings


__all__ = [
    "COLLECTION_NAME",
    "DEFAULT_RAG_RESULTS",
    "Settings",
    "FastAPISettings",
    "VectorStoreSettings",
    "EmbeddingSettings",
    "LLMSettings",
    "RAGSettings",
    "LoggingSettings",
    "load_settings",
]
