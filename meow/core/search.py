"""Semantic search: scope, embed, rank, disambiguate."""

from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Optional

from meow.config import Settings, get_settings
from meow.core.embedding import EmbeddingProvider
from meow.core.normalizer import normalize
from meow.core.ranker import rank, top_candidates
from meow.core.resolver import AmbiguityResolver
from meow.core.scope import filter_by_time, resolve_scope_root, walk_files
from meow.database.vector_db import VectorDB
from meow.models import AiAction, Candidate, EmbeddingRecord, SearchResults

logger = logging.getLogger(__name__)


class SearchOrchestrator:
    """Runs one search from an AiAction to an ordered list of paths.

    EmbeddingError and StorageError propagate; the caller reports them.
    """

    def __init__(
        self,
        store: VectorDB,
        embedder: EmbeddingProvider,
        resolver: Optional[AmbiguityResolver] = None,
        settings: Optional[Settings] = None,
        home: Optional[Path] = None,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self._resolver = resolver
        self._settings = settings or get_settings()
        self._home = home

    def scoped_files(
        self, action: AiAction, today: Optional[date] = None
    ) -> tuple[Path, list[Path]]:
        """Scope root for the action plus its files after the time filter."""
        root = resolve_scope_root(action.folder_hint, action.query, home=self._home)
        files = walk_files(root)
        files = filter_by_time(files, action.time_filter, today=today)
        return root, files

    def search(self, action: AiAction) -> SearchResults:
        raw_query = (action.query or "").strip()
        if not raw_query:
            logger.info("Search without a query; nothing to do")
            return SearchResults()

        final_query = normalize(raw_query)
        root, files = self.scoped_files(action)
        logger.info("Searching in %s (%d files in scope)", root, len(files))

        query_vec = self._embedder.embed(final_query)

        self._store.init_db()
        records = self._store.load_records(model=self._embedder.model)
        logger.debug("Loaded %d vectors", len(records))
        if files:
            allowed = {str(p) for p in files}
            records = [r for r in records if r.path in allowed]

        ranked = rank(query_vec, [(r.path, r.vector) for r in records])
        candidates = top_candidates(ranked, k=self._settings.top_k)

        winner: Optional[int] = None
        if len(candidates) >= 2 and self._resolver is not None:
            winner = self._resolver.resolve(raw_query, candidates)

        by_path = {r.path: r for r in records}
        return SearchResults(
            items=_assemble(candidates, winner),
            candidates=candidates,
            winner=winner,
            stale=_stale_paths(candidates, by_path),
        )


def _assemble(candidates: list[Candidate], winner: Optional[int]) -> list[str]:
    """Winner first (if any), then the remaining candidates in score order."""
    items = [c.path for c in candidates]
    if winner is None:
        return items
    chosen = candidates[winner - 1].path
    return [chosen] + [p for p in items if p != chosen]


def _stale_paths(
    candidates: list[Candidate], records: dict[str, EmbeddingRecord]
) -> list[str]:
    """Candidates edited or removed since they were embedded."""
    stale = []
    for c in candidates:
        record = records.get(c.path)
        if record is None:
            continue
        try:
            current = int(os.stat(c.path).st_mtime)
        except OSError:
            stale.append(c.path)
            continue
        if current > record.modified:
            stale.append(c.path)
    if stale:
        logger.info("%d result(s) need reindexing", len(stale))
    return stale
