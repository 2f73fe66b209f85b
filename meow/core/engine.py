"""Main workflow: wire settings, store and LLM clients; dispatch actions."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from meow.config import Settings, get_settings
from meow.core.embedding import EmbeddingProvider
from meow.core.indexer import Indexer, IndexReport
from meow.core.intent import interpret_command
from meow.core.resolver import AmbiguityResolver, ResolverThresholds
from meow.core.search import SearchOrchestrator
from meow.database.vector_db import VectorDB
from meow.errors import EmbeddingError, StorageError
from meow.models import AiAction, SearchResults
from meow.utils.llm.constants import DECISION_TEMPERATURE
from meow.utils.llm.manager import LLMManager
from meow.utils.opener import open_path

logger = logging.getLogger(__name__)

UNSUPPORTED_INTENTS = ("read", "summarize", "delete")


@dataclass
class ActionOutcome:
    """What happened when an action ran; the shell renders it."""

    results: Optional[SearchResults] = None
    message: Optional[str] = None
    opened: Optional[str] = None


class Engine:
    """Orchestrates indexing, search and intent dispatch. Depends on Settings + LLM."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        llm: Optional[LLMManager] = None,
        embedder: Optional[EmbeddingProvider] = None,
        opener: Callable[[str], bool] = open_path,
    ) -> None:
        self._settings = settings or get_settings()
        self._llm = llm or LLMManager()
        self._embedder = embedder
        self._open = opener
        self.store = VectorDB(self._settings.db_path)

    @property
    def embedder(self) -> EmbeddingProvider:
        if self._embedder is None:
            self._embedder = self._llm.get_embedder()
        return self._embedder

    def _decide(self, prompt: str) -> Optional[str]:
        return self._llm.get_provider().generate_text(
            prompt,
            model=self._llm.decision_model,
            temperature=DECISION_TEMPERATURE,
        )

    def _resolver(self) -> Optional[AmbiguityResolver]:
        if not self._settings.enable_decider:
            return None
        thresholds = ResolverThresholds(
            max_best_score=self._settings.ambiguity_max_best,
            min_gap=self._settings.ambiguity_min_gap,
            min_confidence=self._settings.decision_min_confidence,
        )
        return AmbiguityResolver(self._decide, thresholds)

    def index(
        self,
        roots: Optional[Sequence[Path]] = None,
        on_progress: Optional[Callable[[Path, bool], None]] = None,
    ) -> IndexReport:
        """Index the given roots (default: configured index_roots)."""
        indexer = Indexer(
            self.store,
            self.embedder,
            roots or self._settings.index_roots,
            on_progress=on_progress,
        )
        return indexer.run_report()

    def search(self, action: AiAction) -> SearchResults:
        orchestrator = SearchOrchestrator(
            self.store, self.embedder, self._resolver(), self._settings
        )
        return orchestrator.search(action)

    def prune(self) -> list[str]:
        """Drop records for files that no longer exist. Only runs when asked."""
        self.store.init_db()
        missing = [
            path for path, _ in self.store.load_all() if not Path(path).exists()
        ]
        self.store.delete(missing)
        logger.info("Pruned %d missing file(s)", len(missing))
        return missing

    def open(self, path: str) -> bool:
        return self._open(path)

    def interpret(self, text: str) -> Optional[AiAction]:
        return interpret_command(
            text, self._llm.get_provider(), model=self._llm.intent_model
        )

    def execute(self, action: AiAction) -> ActionOutcome:
        """Run an action. Search failures are reported, never raised."""
        intent = action.intent
        if intent in UNSUPPORTED_INTENTS:
            return ActionOutcome(message=f"({intent} not implemented yet)")
        if intent not in ("search", "open"):
            return ActionOutcome(message=f"Unknown intent: {intent}")

        if not (action.query or "").strip():
            return ActionOutcome(
                results=SearchResults(), message="Cannot search without a query."
            )
        try:
            results = self.search(action)
        except (EmbeddingError, StorageError) as e:
            logger.error("Search failed: %s", e)
            return ActionOutcome(message=f"Search failed: {e}")

        if intent == "open" and results.items:
            target = results.items[0]
            if self._open(target):
                return ActionOutcome(results=results, opened=target)
            return ActionOutcome(results=results, message=f"Could not open {target}")
        return ActionOutcome(results=results)
