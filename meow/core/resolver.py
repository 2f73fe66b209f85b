"""Second opinion for close calls between the top two search results.

When the best match is weak and the runner-up is nearly as good, a small
local model is shown the candidates and asked to pick one index or decline.
Its answer is only trusted when it is well-formed, in range and confident.
Every failure mode ends in "no winner"; nothing here raises.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from meow.errors import DecisionError
from meow.models import Candidate, DecisionResponse
from meow.utils.llm.json_parser import extract_json_object

logger = logging.getLogger(__name__)

# prompt -> raw model text, or None when the backend is unreachable
GenerateFn = Callable[[str], Optional[str]]


@dataclass(frozen=True)
class ResolverThresholds:
    """Tunable cut-offs for ambiguity and acceptance."""

    max_best_score: float = 0.75  # only weak top matches are ambiguous
    min_gap: float = 0.08  # top two closer than this are "too close"
    min_confidence: float = 0.7  # decider answers below this are ignored


class AmbiguityResolver:
    """Decides whether to ask the decider, asks, and vets the answer."""

    def __init__(
        self,
        generate: GenerateFn,
        thresholds: Optional[ResolverThresholds] = None,
    ) -> None:
        self._generate = generate
        self.thresholds = thresholds or ResolverThresholds()

    def is_ambiguous(self, candidates: Sequence[Candidate]) -> bool:
        """True when the top two scores are both low and close together."""
        if len(candidates) < 2:
            return False
        best = candidates[0].score
        second = candidates[1].score
        return best < self.thresholds.max_best_score and (
            best - second
        ) < self.thresholds.min_gap

    @staticmethod
    def build_prompt(query: str, candidates: Sequence[Candidate]) -> str:
        lines = [
            f'User query: "{query}"\n',
            "Choose the SINGLE best matching file from the candidates below.",
            "If you're not sure, choose null.",
            "You MUST choose only from the given indices. Do NOT invent paths.",
            "Reply with exactly one JSON object with keys: choice, confidence.",
            'Example: {"choice": 2, "confidence": 0.82} or '
            '{"choice": null, "confidence": 0.3}\n',
            "Candidates:",
        ]
        for c in candidates:
            lines.append(
                f"{c.idx}. {c.file_name} (ext={c.ext}, folder={c.folder}, "
                f"score={c.score:.4f})"
            )
        return "\n".join(lines)

    def parse_decision(self, raw: str, n_candidates: int) -> Optional[int]:
        """Apply the guardrails to a raw decider answer.

        Raises:
            DecisionError: No JSON object, invalid structure, or a guardrail miss.
        """
        json_str = extract_json_object(raw)
        if json_str is None:
            raise DecisionError(f"No JSON object in decider output: {raw[:200]!r}")
        try:
            decision = DecisionResponse.model_validate_json(json_str)
        except ValidationError as e:
            raise DecisionError(f"Malformed decision: {e.error_count()} errors") from e

        if decision.confidence < self.thresholds.min_confidence:
            raise DecisionError(f"Low confidence {decision.confidence:.2f}")
        if decision.choice is None:
            raise DecisionError("Decider declined to choose")
        if not 1 <= decision.choice <= n_candidates:
            raise DecisionError(f"Choice {decision.choice} out of range 1..{n_candidates}")
        return decision.choice

    def decide(self, query: str, candidates: Sequence[Candidate]) -> Optional[int]:
        """Ask the decider unconditionally; returns a 1-based index or None."""
        if not candidates:
            return None
        raw = self._generate(self.build_prompt(query, candidates))
        try:
            if raw is None:
                raise DecisionError("Decision backend unavailable")
            return self.parse_decision(raw, len(candidates))
        except DecisionError as e:
            logger.info("No confident pick: %s", e)
            return None

    def resolve(self, query: str, candidates: Sequence[Candidate]) -> Optional[int]:
        """Winning 1-based index for an ambiguous result, else None.

        Unambiguous results never trigger a decider call.
        """
        if not self.is_ambiguous(candidates):
            return None
        return self.decide(query, candidates)
