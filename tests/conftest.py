"""Global fixtures: temp store, fake embedder, fake decider."""

import tempfile
from pathlib import Path
from typing import Callable, Optional

import pytest

from meow.config import Settings
from meow.database.vector_db import VectorDB
from meow.errors import EmbeddingError


class FakeEmbedder:
    """Deterministic embedder: looks text up in a table, else a fallback vector."""

    def __init__(
        self,
        table: Optional[dict[str, list[float]]] = None,
        fallback: Optional[list[float]] = None,
        fail_on: Callable[[str], bool] = lambda text: False,
        model: str = "fake-embed",
    ) -> None:
        self.table = table or {}
        self.fallback = fallback if fallback is not None else [1.0, 0.0, 0.0]
        self.fail_on = fail_on
        self._model = model
        self.calls: list[str] = []

    @property
    def model(self) -> str:
        return self._model

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on(text):
            raise EmbeddingError("backend down")
        return list(self.table.get(text, self.fallback))


class FakeDecider:
    """Records prompts and returns a canned raw answer."""

    def __init__(self, answer: Optional[str]) -> None:
        self.answer = answer
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> Optional[str]:
        self.prompts.append(prompt)
        return self.answer


@pytest.fixture
def temp_db_path() -> Path:
    """Temporary SQLite path (cleaned up after test)."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = Path(f.name)
    yield path
    if path.exists():
        path.unlink(missing_ok=True)


@pytest.fixture
def store(temp_db_path: Path) -> VectorDB:
    """Initialized VectorDB with temp path."""
    s = VectorDB(temp_db_path)
    s.init_db()
    return s


@pytest.fixture
def settings(temp_db_path: Path, tmp_path: Path) -> Settings:
    """Settings pointing at temp locations."""
    return Settings(
        db_path=temp_db_path,
        index_roots=[tmp_path / "Downloads"],
        log_file=tmp_path / "meow.log",
    )


@pytest.fixture
def fake_embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def embedder_factory() -> type[FakeEmbedder]:
    return FakeEmbedder


@pytest.fixture
def decider_factory() -> type[FakeDecider]:
    return FakeDecider
