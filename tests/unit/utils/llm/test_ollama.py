"""Tests for the Ollama provider using httpx.MockTransport."""

import json

import httpx

from meow.utils.llm.manager import LLMManager
from meow.utils.llm.config import LLMConfig, OllamaConfig
from meow.utils.llm.ollama import OllamaProvider


def _provider(handler) -> OllamaProvider:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return OllamaProvider(
        base_url="http://ollama.test:11434",
        default_model="llama3.2:3b",
        timeout=5.0,
        client=client,
    )


def test_generate_text_sends_options_and_returns_response() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"response": '{"choice": 1, "confidence": 0.9}'})

    out = _provider(handler).generate_text("pick one", temperature=0.1)

    assert out == '{"choice": 1, "confidence": 0.9}'
    assert bodies == [
        {
            "model": "llama3.2:3b",
            "prompt": "pick one",
            "stream": False,
            "options": {"temperature": 0.1},
        }
    ]


def test_generate_text_returns_none_on_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    assert _provider(handler).generate_text("x") is None


def test_generate_text_truncates_long_prompts() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"response": "ok"})

    _provider(handler).generate_text("a" * 10_000)
    assert len(bodies[0]["prompt"]) == 8000


def test_generate_json_uses_format_mode() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={"response": '{"intent": "search"}'})

    out = _provider(handler).generate_json("cmd", model="llama3:8b")

    assert out == {"intent": "search"}
    assert bodies[0]["format"] == "json"
    assert bodies[0]["model"] == "llama3:8b"


def test_generate_json_retries_without_format() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        bodies.append(body)
        if "format" in body:
            return httpx.Response(400, json={"error": "format unsupported"})
        return httpx.Response(200, json={"response": 'ok: {"intent": "open"}'})

    assert _provider(handler).generate_json("cmd") == {"intent": "open"}
    assert len(bodies) == 2
    assert "format" not in bodies[1]


def test_manager_builds_clients_from_config() -> None:
    config = LLMConfig(
        ollama=OllamaConfig(
            base_url="http://gpu:11434",
            embed_model="mxbai-embed-large",
            decision_model="qwen2.5:3b",
            intent_model="llama3:8b",
        )
    )
    manager = LLMManager(config)

    assert manager.get_provider().default_model == "qwen2.5:3b"
    assert manager.get_provider() is manager.get_provider()
    assert manager.get_embedder().model == "mxbai-embed-large"
    assert manager.intent_model == "llama3:8b"
