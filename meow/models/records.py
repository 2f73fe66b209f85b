"""Schemas for stored embeddings, search candidates and LLM answers."""

from typing import Optional

from pydantic import BaseModel, Field


class EmbeddingRecord(BaseModel):
    """One indexed file: its vector and the mtime seen when it was embedded.

    Stored in the `embeddings` SQLite table, keyed by absolute path.
    """

    path: str = Field(description="Absolute file path (unique key)")
    vector: list[float] = Field(description="Embedding at 32-bit float precision")
    modified: int = Field(0, description="File mtime (epoch seconds) at index time")
    model: Optional[str] = Field(None, description="Embedding model that produced it")


class Candidate(BaseModel):
    """A top-ranked result offered to the decider and shown to the user."""

    idx: int  # 1-based rank
    path: str
    file_name: str
    ext: str
    folder: str
    score: float


class AiAction(BaseModel):
    """Structured command produced by the intent interpreter."""

    intent: str = "search"
    query: Optional[str] = None
    file_type: Optional[str] = None
    time_filter: Optional[str] = None
    folder_hint: Optional[str] = None


class DecisionResponse(BaseModel):
    """Answer from the decision backend: a candidate index or null."""

    choice: Optional[int] = None
    confidence: float = Field(allow_inf_nan=False)


class SearchResults(BaseModel):
    """Final ordered paths plus the candidate details behind them."""

    items: list[str] = Field(default_factory=list)
    candidates: list[Candidate] = Field(default_factory=list)
    winner: Optional[int] = None  # 1-based index into candidates
    stale: list[str] = Field(
        default_factory=list,
        description="Candidate paths changed or missing since indexing",
    )
