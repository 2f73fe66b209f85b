"""Abstract base class for LLM providers."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from .constants import MAX_PROMPT_LENGTH

logger = logging.getLogger(__name__)


class LLMProvider(ABC):
    """Abstract base class for text generation backends.

    Generation never raises: failures are logged and reported as None so
    callers can degrade (the decider treats None as "no confident pick").
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name (e.g., 'ollama')."""
        ...

    @property
    @abstractmethod
    def default_model(self) -> str:
        """Return the default model for this provider."""
        ...

    @abstractmethod
    def generate_text(
        self,
        prompt: str,
        model: str | None = None,
        sanitize: bool = True,
        temperature: float | None = None,
    ) -> Optional[str]:
        """Generate text completion.

        Args:
            prompt: The input prompt.
            model: Model to use (defaults to provider's default_model).
            sanitize: If True, truncate prompt to max safe length.
            temperature: Optional sampling temperature.

        Returns:
            Generated text, or None on error.
        """
        ...

    @abstractmethod
    def generate_json(
        self,
        prompt: str,
        model: str | None = None,
        sanitize: bool = True,
    ) -> Optional[dict[str, Any]]:
        """Generate JSON completion with robust parsing.

        Args:
            prompt: The input prompt (should request JSON output).
            model: Model to use (defaults to provider's default_model).
            sanitize: If True, truncate prompt to max safe length.

        Returns:
            Parsed JSON dict, or None on error/parse failure.
        """
        ...

    def _sanitize_prompt(self, prompt: str, max_length: int = MAX_PROMPT_LENGTH) -> str:
        """Truncate prompt to max safe length for LLM processing."""
        return prompt[:max_length] if len(prompt) > max_length else prompt
