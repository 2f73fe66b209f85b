"""Ollama access for meow.

Generation (intent parsing, tie-breaking between close results) goes
through an LLMProvider; embeddings go through meow.core.embedding.
Configuration is read from ~/.meow/config.toml.

Utilities:
    - LLMManager(config).get_provider() -> LLMProvider
    - LLMManager(config).get_embedder() -> TextEmbedder
    - load_config() -> LLMConfig
    - parse_json_response(text) -> Optional[dict]
    - extract_json_object(text) -> Optional[str]

Example config.toml:
    [llm.ollama]
    base_url = "http://localhost:11434"
    embed_model = "nomic-embed-text"
    decision_model = "llama3.2:3b"
    intent_model = "llama3:8b"
    timeout = 120.0
"""

from .config import LLMConfig, OllamaConfig, load_config
from .json_parser import extract_json_object, parse_json_response
from .manager import LLMManager
from .ollama import OllamaProvider
from .provider import LLMProvider

__all__ = [
    "LLMConfig",
    "LLMManager",
    "LLMProvider",
    "OllamaConfig",
    "OllamaProvider",
    "extract_json_object",
    "load_config",
    "parse_json_response",
]
