"""Configuration for the Ollama backend.

Reads configuration from ~/.meow/config.toml and environment variables.
Environment variables take precedence over config file values.
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .constants import (
    DEFAULT_DECISION_MODEL,
    DEFAULT_EMBED_MODEL,
    DEFAULT_INTENT_MODEL,
    DEFAULT_OLLAMA_URL,
    OLLAMA_TIMEOUT,
)

# Default config file location
DEFAULT_CONFIG_PATH = Path.home() / ".meow" / "config.toml"


@dataclass
class OllamaConfig:
    """Configuration for the Ollama server and the models meow uses."""

    base_url: str = DEFAULT_OLLAMA_URL
    embed_model: str = DEFAULT_EMBED_MODEL
    decision_model: str = DEFAULT_DECISION_MODEL
    intent_model: str = DEFAULT_INTENT_MODEL
    timeout: float = OLLAMA_TIMEOUT  # Request timeout in seconds


@dataclass
class LLMConfig:
    """Main LLM configuration."""

    ollama: OllamaConfig = field(default_factory=OllamaConfig)


def _load_toml(path: Path) -> dict:
    """Load and parse a TOML configuration file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dict, or empty dict if the file doesn't exist.
    """
    if not path.exists():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def load_config(config_path: Optional[Path] = None) -> LLMConfig:
    """Load LLM configuration from file and environment.

    Configuration sources (in order of precedence):
    1. Environment variables (MEOW_OLLAMA_*)
    2. Config file (~/.meow/config.toml)
    3. Default values

    Args:
        config_path: Optional path to config file. Defaults to ~/.meow/config.toml.

    Returns:
        LLMConfig with merged configuration.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    file_config = _load_toml(path)

    ollama_section = file_config.get("llm", {}).get("ollama", {})

    config = LLMConfig()
    config.ollama = OllamaConfig(
        base_url=(
            os.environ.get("MEOW_OLLAMA_BASE_URL")
            or ollama_section.get("base_url", DEFAULT_OLLAMA_URL)
        ),
        embed_model=(
            os.environ.get("MEOW_OLLAMA_EMBED_MODEL")
            or ollama_section.get("embed_model", DEFAULT_EMBED_MODEL)
        ),
        decision_model=(
            os.environ.get("MEOW_OLLAMA_DECISION_MODEL")
            or ollama_section.get("decision_model", DEFAULT_DECISION_MODEL)
        ),
        intent_model=(
            os.environ.get("MEOW_OLLAMA_INTENT_MODEL")
            or ollama_section.get("intent_model", DEFAULT_INTENT_MODEL)
        ),
        timeout=float(
            os.environ.get("MEOW_OLLAMA_TIMEOUT")
            or ollama_section.get("timeout", OLLAMA_TIMEOUT)
        ),
    )
    return config


def get_example_config() -> str:
    """Return example config.toml content with documented options."""
    return f"""# meow - LLM Configuration
# Place this file at ~/.meow/config.toml

[llm.ollama]
# Local Ollama server URL
base_url = "{DEFAULT_OLLAMA_URL}"
embed_model = "{DEFAULT_EMBED_MODEL}"      # file and query embeddings
decision_model = "{DEFAULT_DECISION_MODEL}"        # breaks ties between close results
intent_model = "{DEFAULT_INTENT_MODEL}"            # turns shell input into commands
timeout = {OLLAMA_TIMEOUT}  # Higher timeout for local models
"""
