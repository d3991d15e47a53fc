"""Constants for retrieval services."""

SNIPPET_MAX_LENGTH = 280
NDJSON_MEDIA_TYPE = "application/x-ndjson"
NO_CONTEXT_MESSAGE = "No relevant foods found; responding with model knowledge."

__all__ = ["SNIPPET_MAX_LENGTH", "NDJSON_MEDIA_TYPE", "NO_CONTEXT_MESSAGE"]
