"""Embedding client for the Ollama embeddings endpoint (httpx)."""

import logging
from typing import Any, Optional, Protocol

import httpx

from meow.errors import EmbeddingError
from meow.utils.llm.constants import (
    DEFAULT_EMBED_MODEL,
    DEFAULT_OLLAMA_URL,
    OLLAMA_TIMEOUT,
)

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    """Anything that turns text into a vector for a named model."""

    @property
    def model(self) -> str:
        ...

    def embed(self, text: str) -> list[float]:
        ...


def extract_vector(payload: Any) -> list[float]:
    """Normalize an embeddings response into a list of floats.

    Accepts `{"embedding": [...]}` (Ollama) and
    `{"data": [{"embedding": [...]}]}` (OpenAI-compatible servers).

    Raises:
        EmbeddingError: Neither shape matched, or the vector is empty
            or not numeric.
    """
    raw: Any = None
    if isinstance(payload, dict):
        if isinstance(payload.get("embedding"), list):
            raw = payload["embedding"]
        else:
            data = payload.get("data")
            if isinstance(data, list) and data and isinstance(data[0], dict):
                raw = data[0].get("embedding")

    if not isinstance(raw, list):
        raise EmbeddingError(f"Invalid embedding response: {str(payload)[:200]}")
    if not raw:
        raise EmbeddingError("Received empty embedding")
    try:
        return [float(x) for x in raw]
    except (TypeError, ValueError) as e:
        raise EmbeddingError(f"Non-numeric value in embedding: {e}") from e


class TextEmbedder:
    """Stateless embedding client. One request per call, no retries.

    A failure fails only the operation that asked for the vector; callers
    decide whether to skip (indexer) or abort (search).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_OLLAMA_URL,
        model: str = DEFAULT_EMBED_MODEL,
        timeout: float = OLLAMA_TIMEOUT,
        endpoint: str = "/api/embeddings",
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}{endpoint}"
        self._model = model
        self._timeout = timeout
        self._client = client

    @property
    def model(self) -> str:
        return self._model

    def embed(self, text: str) -> list[float]:
        """Embed `text`.

        Raises:
            EmbeddingError: Network failure, unparseable body or empty vector.
        """
        # Ollama expects `prompt`, not `input`
        body = {"model": self._model, "prompt": text}
        try:
            if self._client is not None:
                response = self._client.post(self._url, json=body, timeout=self._timeout)
            else:
                response = httpx.post(self._url, json=body, timeout=self._timeout)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise EmbeddingError(f"Embedding request failed: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            raise EmbeddingError(f"Embedding response is not JSON: {e}") from e

        vector = extract_vector(payload)
        logger.debug("Embedded %d chars -> %d dims", len(text), len(vector))
        return vector
