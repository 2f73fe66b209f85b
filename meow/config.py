"""Environment and settings (Pydantic Settings)."""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default data directory: ~/.meow/data/
_data_dir = Path.home() / ".meow" / "data"


def _default_index_roots() -> list[Path]:
    home = Path.home()
    return [home / "Downloads", home / "Pictures", home / "OneDrive" / "Pictures"]


class Settings(BaseSettings):
    """meow settings loaded from environment and .env.

    Ollama endpoint and model names live in ~/.meow/config.toml and are
    loaded by the LLM module.
    """

    model_config = SettingsConfigDict(
        env_prefix="MEOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Paths (local-first data stored in ~/.meow/data/)
    db_path: Path = _data_dir / "meow_vectors.db"
    index_roots: list[Path] = Field(default_factory=_default_index_roots)

    # Ranking and disambiguation
    top_k: int = 10
    ambiguity_max_best: float = 0.75
    ambiguity_min_gap: float = 0.08
    decision_min_confidence: float = 0.7
    enable_decider: bool = True

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Path = _data_dir / "meow.log"


def get_settings() -> Settings:
    """Return application settings (singleton-like)."""
    return Settings()
