"""Tests for turning shell input into an AiAction."""

from typing import Any, Optional

from meow.core.intent import interpret_command


class _JsonProvider:
    def __init__(self, answer: Optional[dict[str, Any]]) -> None:
        self.answer = answer
        self.calls: list[tuple[str, Optional[str]]] = []

    def generate_json(self, prompt: str, model: str | None = None, sanitize: bool = True):
        self.calls.append((prompt, model))
        return self.answer


def test_parses_full_action() -> None:
    provider = _JsonProvider(
        {
            "intent": "Search",
            "query": "hostel fees",
            "file_type": "pdf",
            "time_filter": "yesterday",
            "folder_hint": "downloads",
        }
    )
    action = interpret_command(
        "find the hostel fees pdf I downloaded yesterday", provider, model="llama3:8b"
    )
    assert action is not None
    assert action.intent == "search"
    assert action.query == "hostel fees"
    assert action.folder_hint == "downloads"
    prompt, model = provider.calls[0]
    assert "find the hostel fees pdf I downloaded yesterday" in prompt
    assert model == "llama3:8b"


def test_empty_strings_become_none() -> None:
    action = interpret_command(
        "x", _JsonProvider({"intent": "open", "query": "cv", "time_filter": ""})
    )
    assert action is not None
    assert action.time_filter is None


def test_backend_unavailable_returns_none() -> None:
    assert interpret_command("x", _JsonProvider(None)) is None


def test_schema_mismatch_returns_none() -> None:
    assert interpret_command("x", _JsonProvider({"intent": ["search"]})) is None


def test_missing_intent_defaults_to_search() -> None:
    for answer in ({"intent": None, "query": "tax return"}, {"intent": "", "query": "tax return"}):
        action = interpret_command("x", _JsonProvider(answer))
        assert action is not None
        assert action.intent == "search"
        assert action.query == "tax return"
