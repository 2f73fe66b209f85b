"""Ollama LLM provider using httpx for API calls."""

import logging
from typing import Any, Optional

import httpx

from .constants import DEFAULT_DECISION_MODEL, DEFAULT_OLLAMA_URL, OLLAMA_TIMEOUT
from .json_parser import parse_json_response
from .provider import LLMProvider

logger = logging.getLogger(__name__)


class OllamaProvider(LLMProvider):
    """LLM provider for Ollama local models.

    Uses httpx for direct API calls to the Ollama server.
    No SDK dependency required.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_OLLAMA_URL,
        default_model: str = DEFAULT_DECISION_MODEL,
        timeout: float = OLLAMA_TIMEOUT,
        client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialize Ollama provider.

        Args:
            base_url: Ollama server URL (default: http://localhost:11434).
            default_model: Default model to use.
            timeout: Request timeout in seconds (higher for local inference).
            client: Optional preconfigured httpx client (tests use MockTransport).
        """
        self._base_url = base_url.rstrip("/")
        self._default_model = default_model
        self._timeout = timeout
        self._client = client

    @property
    def name(self) -> str:
        """Return provider name."""
        return "ollama"

    @property
    def default_model(self) -> str:
        """Return default model."""
        return self._default_model

    def _post_generate(self, body: dict[str, Any]) -> Optional[str]:
        """POST to /api/generate and return the `response` text field."""
        url = f"{self._base_url}/api/generate"
        if self._client is not None:
            response = self._client.post(url, json=body, timeout=self._timeout)
        else:
            response = httpx.post(url, json=body, timeout=self._timeout)
        response.raise_for_status()
        data = response.json()
        if isinstance(data, dict) and isinstance(data.get("response"), str):
            return data["response"]
        return None

    def generate_text(
        self,
        prompt: str,
        model: str | None = None,
        sanitize: bool = True,
        temperature: float | None = None,
    ) -> Optional[str]:
        """Generate text completion using Ollama.

        Args:
            prompt: The input prompt.
            model: Model to use (defaults to the decision model).
            sanitize: If True, truncate prompt to 8000 chars.
            temperature: Optional sampling temperature (sent as an option).

        Returns:
            Generated text, or None on error.
        """
        text = self._sanitize_prompt(prompt) if sanitize else prompt
        body: dict[str, Any] = {
            "model": model or self._default_model,
            "prompt": text,
            "stream": False,
        }
        if temperature is not None:
            body["options"] = {"temperature": temperature}

        try:
            return self._post_generate(body)
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Ollama generation failed: %s: %s", type(e).__name__, e)
        return None

    def generate_json(
        self,
        prompt: str,
        model: str | None = None,
        sanitize: bool = True,
    ) -> Optional[dict[str, Any]]:
        """Generate JSON completion using Ollama.

        Ollama supports native JSON mode via the format parameter; if that
        request fails the prompt is retried without it.

        Args:
            prompt: The input prompt (should request JSON output).
            model: Model to use (defaults to the decision model).
            sanitize: If True, truncate prompt to 8000 chars.

        Returns:
            Parsed JSON dict, or None on error.
        """
        text = self._sanitize_prompt(prompt) if sanitize else prompt
        json_prompt = f"{text}\n\nRespond with valid JSON only."
        body: dict[str, Any] = {
            "model": model or self._default_model,
            "prompt": json_prompt,
            "stream": False,
            "format": "json",
        }

        try:
            raw = self._post_generate(body)
            if raw is not None:
                return parse_json_response(raw)
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Ollama JSON mode failed, trying without: %s", e)
            body.pop("format")
            try:
                raw = self._post_generate(body)
                if raw is not None:
                    return parse_json_response(raw)
            except (httpx.HTTPError, ValueError) as e2:
                logger.debug("Ollama fallback generation failed: %s", e2)

        return None
