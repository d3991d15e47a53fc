"""Gradio-powered console for loading the dataset and asking questions."""
from __future__ import annotations

import json
from collections.abc import Iterator
from textwrap import dedent
from typing import Any, Dict

import gradio as gr
import httpx

from ..config import Settings

DEFAULT_BASE_URL = "http://localhost:8000"


def _normalise_base_url(base_url: str | None) -> str:
    base = (base_url or DEFAULT_BASE_URL).strip().rstrip("/")
    return base or DEFAULT_BASE_URL


def _http_error_message(exc: httpx.HTTPError) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        detail: str | None = None
        try:
            payload = exc.response.json()
            if isinstance(payload, dict):
                detail = payload.get("detail") or payload.get("message")
        except ValueError:
            detail = None
        return f"HTTP {exc.response.status_code}: {detail or exc.response.reason_phrase}"
    return str(exc)


def _status_message(message: str, level: str = "info") -> str:
    icon = {"info": "ℹ️", "success": "✅", "error": "❌"}.get(level, "")
    return f"<div class='status-box {level}'>{icon} {message}</div>"


def load_foods(base_url: str, force: bool) -> str:
    """Trigger ingestion of the food dataset through the API."""

    url = f"{_normalise_base_url(base_url)}/ingestion/foods"
    try:
        with httpx.Client(timeout=120.0) as client:
            response = client.post(url, json={"force": bool(force)})
            response.raise_for_status()
            data: Dict[str, Any] = response.json()
    except httpx.HTTPError as exc:
        return _status_message(f"Loading failed: {_http_error_message(exc)}", "error")
    return _status_message(
        f"Loaded {data.get('added', 0)} of {data.get('total', 0)} foods "
        f"({data.get('skipped', 0)} already stored).",
        "success",
    )


def iter_answer_events(base_url: str, question: str, k: int | None) -> Iterator[Dict[str, Any]]:
    """Yield decoded NDJSON events from the ask endpoint."""

    url = f"{_normalise_base_url(base_url)}/chat/ask"
    payload: Dict[str, Any] = {"question": question}
    if k:
        payload["k"] = int(k)
    with httpx.Client(timeout=httpx.Timeout(30.0, read=None)) as client:
        with client.stream("POST", url, json=payload) as response:
            response.raise_for_status()
            for line in response.iter_lines():
                if not line:
                    continue
                try:
                    yield json.loads(line)
                except json.JSONDecodeError:
                    continue


def _format_sources(snippets: list[Dict[str, Any]]) -> str:
    if not snippets:
        return "_No matching foods._"
    lines = [
        f"- **{item.get('label')}** {item.get('snippet')} _(score {float(item.get('score') or 0.0):.3f})_"
        for item in snippets
    ]
    return "\n".join(lines)


def ask_question(base_url: str, question: str, k: float | None) -> Iterator[tuple[str, str, str]]:
    """Stream status, answer text and sources into the console."""

    if not question or not question.strip():
        yield _status_message("Please enter a question.", "error"), "", ""
        return
    answer = ""
    sources = ""
    status = _status_message("Asking…")
    yield status, answer, sources
    try:
        for event in iter_answer_events(base_url, question.strip(), int(k) if k else None):
            kind = event.get("type")
            if kind == "status":
                status = _status_message(str(event.get("message", "")))
            elif kind == "context":
                sources = _format_sources(event.get("snippets") or [])
            elif kind == "token":
                answer += str(event.get("text", ""))
            elif kind == "error":
                status = _status_message(str(event.get("message", "Request failed")), "error")
            elif kind == "done":
                status = _status_message("Answer ready.", "success")
            yield status, answer, sources
    except httpx.HTTPError as exc:
        yield _status_message(f"Request failed: {_http_error_message(exc)}", "error"), answer, sources


def create_frontend(settings: Settings) -> gr.Blocks:
    """Return a configured Gradio Blocks interface."""

    title = settings.fastapi.title or "Food RAG"
    default_base = f"http://localhost:{settings.fastapi.port}"

    with gr.Blocks(title=f"{title} Console") as demo:
        gr.Markdown(
            dedent(
                f"""
                # {title}

                Load the food dataset into the vector store, then ask questions about it.
                Every action goes through the public HTTP API.
                """
            ).strip()
        )

        base_url_input = gr.Textbox(label="API Base URL", value=default_base)

        with gr.Group():
            gr.Markdown("## Dataset")
            force_input = gr.Checkbox(label="Re-embed foods that are already stored", value=False)
            load_button = gr.Button("Load food data", variant="primary")
            load_feedback = gr.HTML(_status_message("The dataset has not been loaded in this session."))

        with gr.Group():
            gr.Markdown("## Ask")
            question_input = gr.Textbox(label="Question", placeholder="Which dishes come from Japan?")
            k_input = gr.Number(label="Foods to retrieve", value=settings.rag.default_results, precision=0)
            ask_button = gr.Button("Ask", variant="primary")
            ask_feedback = gr.HTML("")
            answer_output = gr.Markdown()
            sources_output = gr.Markdown()

        load_button.click(load_foods, inputs=[base_url_input, force_input], outputs=[load_feedback])
        ask_button.click(
            ask_question,
            inputs=[base_url_input, question_input, k_input],
            outputs=[ask_feedback, answer_output, sources_output],
        )

    return demo


__all__ = ["create_frontend", "ask_question", "load_foods", "iter_answer_events"]
