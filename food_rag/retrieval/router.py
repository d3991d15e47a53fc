"""Question answering endpoints."""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from .constants import NDJSON_MEDIA_TYPE
from .dependencies import get_rag_service
from .schemas import MatchResponse, QuestionRequest, SearchResponse
from .service import RAGService

router = APIRouter()


@router.post("/search", response_model=SearchResponse)
async def search(payload: QuestionRequest, service: RAGService = Depends(get_rag_service)) -> SearchResponse:
    matches = await service.search(payload.question, payload.k)
    return SearchResponse(
        question=payload.question,
        matches=[MatchResponse(id=match.id, text=match.text, distance=match.distance) for match in matches],
    )


@router.post("/ask", response_class=StreamingResponse)
async def ask(payload: QuestionRequest, service: RAGService = Depends(get_rag_service)) -> StreamingResponse:
    stream = await service.answer(payload.question, payload.k)
    return StreamingResponse(
        stream,
        media_type=NDJSON_MEDIA_TYPE,
        headers={"Cache-Control": "no-store"},
    )


__all__ = ["router"]
