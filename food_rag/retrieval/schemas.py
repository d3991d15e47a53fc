"""Schemas for question answering endpoints."""
from __future__ import annotations

from pydantic import BaseModel, Field


class QuestionRequest(BaseModel):
    question: str = Field(..., min_length=1, description="Natural-language question about food")
    k: int | None = Field(default=None, ge=1, description="Number of foods to retrieve as context")


class MatchResponse(BaseModel):
    id: str
    text: str
    distance: float


class SearchResponse(BaseModel):
    question: str
    matches: list[MatchResponse]


__all__ = ["QuestionRequest", "MatchResponse", "SearchResponse"]
