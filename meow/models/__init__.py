"""Domain models."""

from .records import (
    AiAction,
    Candidate,
    DecisionResponse,
    EmbeddingRecord,
    SearchResults,
)

__all__ = [
    "AiAction",
    "Candidate",
    "DecisionResponse",
    "EmbeddingRecord",
    "SearchResults",
]
