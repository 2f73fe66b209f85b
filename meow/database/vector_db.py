"""SQLite store for file embeddings. All store I/O stays in this module."""

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterable, Iterator, Optional

import numpy as np

from meow.errors import StorageError
from meow.models import EmbeddingRecord

logger = logging.getLogger(__name__)

# Little-endian float32, independent of host byte order
_VECTOR_DTYPE = np.dtype("<f4")
# Element count that older stores wrote ahead of the floats
_LENGTH_PREFIX = np.dtype("<u8")


def serialize_vector(vector: Iterable[float]) -> bytes:
    """Pack floats into a float32 blob, order preserved."""
    try:
        arr = np.asarray(list(vector), dtype=_VECTOR_DTYPE)
    except (TypeError, ValueError) as e:
        raise StorageError(f"Cannot serialize vector: {e}") from e
    if arr.ndim != 1:
        raise StorageError(f"Vector must be one-dimensional, got shape {arr.shape}")
    return arr.tobytes()


def _strip_length_prefix(blob: bytes) -> bytes:
    """Drop the u64 element count older stores put before the floats."""
    if len(blob) < _LENGTH_PREFIX.itemsize:
        return blob
    (n,) = np.frombuffer(blob, dtype=_LENGTH_PREFIX, count=1)
    body = blob[_LENGTH_PREFIX.itemsize :]
    if int(n) * _VECTOR_DTYPE.itemsize == len(body):
        return body
    return blob


def deserialize_vector(
    blob: bytes, path: str = "", dim: Optional[int] = None
) -> list[float]:
    """Unpack a float32 blob written by serialize_vector.

    `dim` is the element count stored alongside the blob. Rows without it
    predate model tagging and may carry a length prefix.
    """
    if not isinstance(blob, (bytes, bytearray, memoryview)):
        raise StorageError(
            f"Vector for {path!r} is {type(blob).__name__}, not a blob", path=path
        )
    blob = bytes(blob)
    if dim is None:
        blob = _strip_length_prefix(blob)
    elif len(blob) != int(dim) * _VECTOR_DTYPE.itemsize:
        raise StorageError(
            f"Vector for {path!r} has {len(blob)} bytes, expected {dim} floats",
            path=path,
        )
    if len(blob) % _VECTOR_DTYPE.itemsize != 0:
        raise StorageError(f"Corrupt vector blob for {path!r}", path=path)
    count = len(blob) // _VECTOR_DTYPE.itemsize
    try:
        return np.frombuffer(blob, dtype=_VECTOR_DTYPE, count=count).tolist()
    except (TypeError, ValueError) as e:
        raise StorageError(f"Corrupt vector blob for {path!r}: {e}", path=path) from e


class VectorDB:
    """Embeddings table keyed by absolute path.

    A connection is opened per operation; single writer assumed.
    """

    def __init__(self, db_path: Path) -> None:
        self._path = Path(db_path)

    @property
    def path(self) -> Path:
        return self._path

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """Open, commit and close a connection; sqlite/OS errors become StorageError."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self._path)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Cannot open vector store {self._path}: {e}") from e
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            # Closing without commit discards the partial write
            raise StorageError(f"Vector store error: {e}") from e
        finally:
            conn.close()

    def init_db(self) -> None:
        """Create embeddings table if it does not exist."""
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS embeddings (
                    path TEXT PRIMARY KEY,
                    vector BLOB,
                    modified INTEGER
                )
            """
            )
            # Migration: stores written before model tagging lack these columns
            self._migrate_add_model_columns(conn)

    def _migrate_add_model_columns(self, conn: sqlite3.Connection) -> None:
        """Add model/dim columns if they don't exist (migration)."""
        cursor = conn.execute("PRAGMA table_info(embeddings)")
        columns = [row[1] for row in cursor.fetchall()]
        if "model" not in columns:
            conn.execute("ALTER TABLE embeddings ADD COLUMN model TEXT")
        if "dim" not in columns:
            conn.execute("ALTER TABLE embeddings ADD COLUMN dim INTEGER")

    def upsert(
        self,
        path: str,
        vector: list[float],
        modified: int,
        model: Optional[str] = None,
    ) -> None:
        """Insert or overwrite the record for `path` (last write wins)."""
        blob = serialize_vector(vector)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO embeddings (path, vector, modified, model, dim)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(path) DO UPDATE SET
                    vector = excluded.vector,
                    modified = excluded.modified,
                    model = excluded.model,
                    dim = excluded.dim
                """,
                (path, blob, int(modified), model, len(blob) // _VECTOR_DTYPE.itemsize),
            )

    def load_records(self, model: Optional[str] = None) -> list[EmbeddingRecord]:
        """Return stored records in insertion order.

        With `model` given, records tagged with a different model are left
        out; untagged rows from older stores are kept.
        """
        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            if model is None:
                rows = conn.execute(
                    "SELECT path, vector, modified, model, dim FROM embeddings "
                    "ORDER BY rowid ASC"
                ).fetchall()
            else:
                rows = conn.execute(
                    "SELECT path, vector, modified, model, dim FROM embeddings "
                    "WHERE model = ? OR model IS NULL ORDER BY rowid ASC",
                    (model,),
                ).fetchall()
        return [_row_to_record(r) for r in rows]

    def load_all(self, model: Optional[str] = None) -> list[tuple[str, list[float]]]:
        """Full scan as (path, vector) pairs."""
        return [(r.path, r.vector) for r in self.load_records(model=model)]

    def count(self) -> int:
        with self._connect() as conn:
            (n,) = conn.execute("SELECT COUNT(*) FROM embeddings").fetchone()
        return int(n)

    def delete(self, paths: Iterable[str]) -> int:
        """Remove records for the given paths. Returns rows deleted."""
        params = [(p,) for p in paths]
        if not params:
            return 0
        with self._connect() as conn:
            before = conn.total_changes
            conn.executemany("DELETE FROM embeddings WHERE path = ?", params)
            return conn.total_changes - before


def _row_to_record(row: sqlite3.Row) -> EmbeddingRecord:
    path = row["path"]
    return EmbeddingRecord(
        path=path,
        vector=deserialize_vector(row["vector"], path, row["dim"]),
        modified=row["modified"] or 0,
        model=row["model"],
    )
