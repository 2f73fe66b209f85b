"""Walk the configured roots and embed every file into the vector store."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from meow.core.embedding import EmbeddingProvider
from meow.core.representation import build_representation
from meow.core.scope import walk_files
from meow.database.vector_db import VectorDB
from meow.errors import EmbeddingError, StorageError

logger = logging.getLogger(__name__)


@dataclass
class IndexReport:
    """Outcome of one indexing run."""

    indexed: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.indexed + self.skipped


class Indexer:
    """Indexes files one at a time; a failing file is skipped, not fatal."""

    def __init__(
        self,
        store: VectorDB,
        embedder: EmbeddingProvider,
        roots: Sequence[Path],
        on_progress: Optional[Callable[[Path, bool], None]] = None,
    ) -> None:
        self._store = store
        self._embedder = embedder
        self._roots = [Path(r).expanduser().absolute() for r in roots]
        self._on_progress = on_progress

    def existing_roots(self) -> list[Path]:
        return [r for r in self._roots if r.is_dir()]

    def collect_files(self) -> list[Path]:
        files: list[Path] = []
        for root in self.existing_roots():
            logger.info("Indexing root: %s", root)
            files.extend(walk_files(root))
        return files

    def index_file(self, path: Path) -> None:
        """Embed one file and upsert it.

        Raises:
            OSError: File metadata could not be read.
            EmbeddingError: Embedding call failed.
            StorageError: Upsert failed.
        """
        modified = int(os.stat(path).st_mtime)
        ext = path.suffix.lstrip(".").lower()
        text = build_representation(path, ext)
        vector = self._embedder.embed(text)
        self._store.upsert(str(path), vector, modified, model=self._embedder.model)

    def run_report(self) -> IndexReport:
        self._store.init_db()
        files = self.collect_files()
        logger.info("Found %d files", len(files))

        report = IndexReport()
        for path in files:
            try:
                self.index_file(path)
            except (OSError, EmbeddingError, StorageError) as e:
                logger.warning("Skipped %s: %s", path, e)
                report.skipped += 1
                ok = False
            else:
                report.indexed += 1
                ok = True
            if self._on_progress is not None:
                self._on_progress(path, ok)

        logger.info("Indexed %d files (%d skipped)", report.indexed, report.skipped)
        return report

    def run(self) -> int:
        """Index every file under the existing roots; returns the success count."""
        return self.run_report().indexed
