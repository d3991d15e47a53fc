"""Console helper tests."""
from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from food_rag.frontend import gradio_app


def test_ask_question_accumulates_streamed_events(monkeypatch: pytest.MonkeyPatch) -> None:
    events = [
        {"type": "status", "stage": "retrieving", "message": "Searching the food database…"},
        {"type": "context", "snippets": [{"label": "[1]", "snippet": "Sushi (Dish, Japan)", "score": 0.91}]},
        {"type": "token", "text": "Sushi "},
        {"type": "token", "text": "[1]"},
        {"type": "done", "answer": "Sushi [1]"},
    ]
    calls: list[tuple[str, str, int | None]] = []

    def fake_events(base_url: str, question: str, k: int | None) -> Iterator[dict[str, Any]]:
        calls.append((base_url, question, k))
        yield from events

    monkeypatch.setattr(gradio_app, "iter_answer_events", fake_events)

    updates = list(gradio_app.ask_question("http://api", "  Japanese food?  ", 2.0))
    status, answer, sources = updates[-1]
    assert calls == [("http://api", "Japanese food?", 2)]
    assert answer == "Sushi [1]"
    assert "**[1]** Sushi (Dish, Japan)" in sources
    assert "0.910" in sources
    assert "Answer ready." in status


def test_ask_question_requires_text() -> None:
    updates = list(gradio_app.ask_question("http://api", "   ", None))
    assert len(updates) == 1
    assert "Please enter a question." in updates[0][0]


def test_format_sources_without_matches() -> None:
    assert gradio_app._format_sources([]) == "_No matching foods._"
