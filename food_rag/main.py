"""FastAPI application factory."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import gradio as gr
import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .dependencies import get_vector_store
from .exceptions import DimensionMismatchError, ServiceError, VectorStoreError
from .frontend import create_frontend
from .infrastructure.embeddings.factory import create_embedding_client
from .infrastructure.llm.factory import create_llm_client
from .infrastructure.vectorstore.base import VectorStore
from .infrastructure.vectorstore.factory import create_vector_store
from .ingestion.exceptions import DatasetNotFoundError
from .ingestion.router import router as ingestion_router
from .logging import setup_logging
from .retrieval.router import router as retrieval_router

LOGGER = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    async def _dimension_mismatch(request: Request, exc: DimensionMismatchError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content={"detail": str(exc)})

    async def _vector_store_error(request: Request, exc: VectorStoreError) -> JSONResponse:
        LOGGER.error("Vector store failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})

    async def _dataset_not_found(request: Request, exc: DatasetNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    async def _service_error(request: Request, exc: ServiceError) -> JSONResponse:
        LOGGER.error("Service failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})

    app.add_exception_handler(DimensionMismatchError, _dimension_mismatch)
    app.add_exception_handler(VectorStoreError, _vector_store_error)
    app.add_exception_handler(DatasetNotFoundError, _dataset_not_found)
    app.add_exception_handler(ServiceError, _service_error)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or load_settings()
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        vector_store = create_vector_store(settings)
        # Initialisation failures propagate and abort start-up.
        await vector_store.initialize()
        app.state.vector_store = vector_store
        app.state.embedder = create_embedding_client(settings)
        app.state.llm = create_llm_client(settings)
        LOGGER.info(
            "Application ready | vector_store=%s embedder=%s llm=%s",
            vector_store.name,
            app.state.embedder.model_name,
            app.state.llm.model_name,
        )
        try:
            yield
        finally:
            await vector_store.close()
            LOGGER.info("Vector store closed | backend=%s", vector_store.name)

    app = FastAPI(
        title=settings.fastapi.title,
        description=settings.fastapi.description,
        version=settings.fastapi.version,
        docs_url=settings.fastapi.docs_url,
        redoc_url=settings.fastapi.redoc_url,
        openapi_url=settings.fastapi.openapi_url,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.fastapi.cors_allow_origins,
        allow_credentials=settings.fastapi.cors_allow_credentials,
        allow_methods=settings.fastapi.cors_allow_methods,
        allow_headers=settings.fastapi.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware, minimum_size=settings.fastapi.gzip_minimum_size)
    _register_exception_handlers(app)

    app.include_router(ingestion_router, prefix="/ingestion", tags=["ingestion"])
    app.include_router(retrieval_router, prefix="/chat", tags=["retrieval"])

    async def health(vector_store: VectorStore = Depends(get_vector_store)) -> dict[str, object]:
        ids = await vector_store.get_existing_ids()
        return {"status": "ok", "vector_store": vector_store.name, "documents": len(ids)}

    app.add_api_route("/health", health, methods=["GET"], tags=["health"])

    if settings.fastapi.enable_console:
        app = gr.mount_gradio_app(app, create_frontend(settings), path=settings.fastapi.console_path)

    return app


def main() -> None:
    settings = load_settings()
    uvicorn.run(create_app(settings), host=settings.fastapi.host, port=settings.fastapi.port)


if __name__ == "__main__":
    main()
