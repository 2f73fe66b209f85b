"""Settings load from MEOW_ environment variables."""

from pathlib import Path

import pytest

from meow.config import Settings


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    # keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = Settings()
    assert settings.top_k == 10
    assert settings.ambiguity_max_best == 0.75
    assert settings.ambiguity_min_gap == 0.08
    assert settings.decision_min_confidence == 0.7
    assert settings.db_path.name == "meow_vectors.db"
    assert [p.name for p in settings.index_roots] == ["Downloads", "Pictures", "Pictures"]


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("MEOW_TOP_K", "3")
    monkeypatch.setenv("MEOW_ENABLE_DECIDER", "false")
    monkeypatch.setenv("MEOW_DB_PATH", str(tmp_path / "v.db"))
    monkeypatch.setenv("MEOW_INDEX_ROOTS", '["/srv/a", "/srv/b"]')

    settings = Settings()

    assert settings.top_k == 3
    assert settings.enable_decider is False
    assert settings.db_path == tmp_path / "v.db"
    assert settings.index_roots == [Path("/srv/a"), Path("/srv/b")]


def test_dotenv_file_is_read(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("MEOW_LOG_LEVEL=DEBUG\n")
    assert Settings().log_level == "DEBUG"
