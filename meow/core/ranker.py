"""Cosine ranking of stored vectors against a query vector."""

import logging
import math
from pathlib import Path
from typing import Sequence

import numpy as np

from meow.models import Candidate

logger = logging.getLogger(__name__)

TOP_K = 10


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Dot product over the product of Euclidean norms.

    Zero-norm vectors (undefined similarity) and mismatched dimensions
    score 0.0, so NaN never reaches the sort.
    """
    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)
    if va.shape != vb.shape:
        logger.debug("Dimension mismatch: %s vs %s", va.shape, vb.shape)
        return 0.0
    denom = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    score = float(np.dot(va, vb)) / denom
    return score if math.isfinite(score) else 0.0


def rank(
    query_vector: Sequence[float],
    records: Sequence[tuple[str, Sequence[float]]],
) -> list[tuple[str, float]]:
    """Score every record and sort descending.

    The sort is stable: equal scores keep their order from `records`.
    """
    scored = [(path, cosine_similarity(query_vector, vec)) for path, vec in records]
    return sorted(scored, key=lambda item: item[1], reverse=True)


def top_candidates(ranked: Sequence[tuple[str, float]], k: int = TOP_K) -> list[Candidate]:
    """Build 1-based candidates from the first `k` ranked entries."""
    candidates = []
    for i, (path, score) in enumerate(ranked[:k], start=1):
        p = Path(path)
        candidates.append(
            Candidate(
                idx=i,
                path=path,
                file_name=p.name,
                ext=p.suffix.lstrip(".").lower(),
                folder=p.parent.name,
                score=score,
            )
        )
    return candidates
