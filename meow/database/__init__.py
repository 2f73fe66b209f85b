"""Database layer - SQLite store for file embeddings."""

from .vector_db import VectorDB, deserialize_vector, serialize_vector

__all__ = ["VectorDB", "deserialize_vector", "serialize_vector"]
