"""LLM Manager: lazily builds the provider and embedder from config.

One manager is created per CLI or shell session and handed to the
components that need it; nothing here is a process-wide singleton.
"""

from typing import TYPE_CHECKING, Optional

from .config import LLMConfig, load_config
from .ollama import OllamaProvider
from .provider import LLMProvider

if TYPE_CHECKING:
    from meow.core.embedding import TextEmbedder


class LLMManager:
    """Owns the configured generation provider and embedding client.

    Uses lazy initialization - clients are only created when first needed.
    """

    def __init__(self, config: Optional[LLMConfig] = None) -> None:
        """Initialize LLM manager.

        Args:
            config: Optional LLM config. If None, loads from config file.
        """
        self._config = config
        self._provider: Optional[LLMProvider] = None
        self._embedder: Optional["TextEmbedder"] = None

    @property
    def config(self) -> LLMConfig:
        """Get configuration, loading from file if needed."""
        if self._config is None:
            self._config = load_config()
        return self._config

    def get_provider(self) -> LLMProvider:
        """Get the generation provider used for intents and decisions."""
        if self._provider is None:
            ollama = self.config.ollama
            self._provider = OllamaProvider(
                base_url=ollama.base_url,
                default_model=ollama.decision_model,
                timeout=ollama.timeout,
            )
        return self._provider

    def get_embedder(self) -> "TextEmbedder":
        """Get the embedding client for files and queries."""
        # Lazy import: meow.core.embedding reads constants from this package
        from meow.core.embedding import TextEmbedder

        if self._embedder is None:
            ollama = self.config.ollama
            self._embedder = TextEmbedder(
                base_url=ollama.base_url,
                model=ollama.embed_model,
                timeout=ollama.timeout,
            )
        return self._embedder

    @property
    def intent_model(self) -> str:
        return self.config.ollama.intent_model

    @property
    def decision_model(self) -> str:
        return self.config.ollama.decision_model
