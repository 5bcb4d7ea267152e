"""Plain-function matching run, without the workflow graph."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from smart_allocation.allocation.greedy import (
    AllocationEngine,
    AllocationResult,
    AllocationStrategy,
)
from smart_allocation.config import get_settings
from smart_allocation.models.candidate import Candidate
from smart_allocation.models.opportunity import Opportunity
from smart_allocation.models.pool import ensure_unique_ids
from smart_allocation.scoring.ensemble import EnsembleScorer
from smart_allocation.scoring.features import FeatureExtractor
from smart_allocation.scoring.lexical import LexicalIndex
from smart_allocation.scoring.models import ScoredEdge


@dataclass(frozen=True)
class MatchRun:
    """Everything one matching run produced."""

    index: LexicalIndex
    edges: list[ScoredEdge]
    result: AllocationResult


def score_pool(
    candidates: Sequence[Candidate],
    opportunities: Sequence[Opportunity],
    index: LexicalIndex,
    scorer: EnsembleScorer,
    aptitude_max: float | None = None,
    portfolio_cap: int | None = None,
) -> list[ScoredEdge]:
    """Score every candidate against every opportunity with capacity >= 1."""
    settings = get_settings()
    extractor = FeatureExtractor(
        index,
        aptitude_max=aptitude_max or settings.aptitude_max,
        portfolio_cap=portfolio_cap or settings.portfolio_cap,
    )
    eligible = [o for o in opportunities if o.capacity >= 1]
    return scorer.score_all(candidates, eligible, extractor)


def match_pool(
    candidates: Sequence[Candidate],
    opportunities: Sequence[Opportunity],
    seed: int | None = None,
    scorer: EnsembleScorer | None = None,
    strategy: AllocationStrategy | None = None,
) -> MatchRun:
    """Run index building, scoring and allocation over one pool.

    Args:
        candidates: Validated candidates.
        opportunities: Validated opportunities; capacity < 1 ones are excluded.
        seed: Shape-scoring seed. Defaults to the configured seed.
        scorer: Ensemble scorer to use instead of one built from ``seed``.
        strategy: Allocation strategy. Defaults to the greedy engine.

    Returns:
        MatchRun with the index, every scored edge and the allocation result.

    Raises:
        DuplicateIdentifierError: If an id is reused within candidates or opportunities.
    """
    ensure_unique_ids(candidates, opportunities)
    settings = get_settings()

    if scorer is None:
        scorer = EnsembleScorer(
            seed=settings.seed if seed is None else seed,
            hidden_size=settings.hidden_size,
        )

    index = LexicalIndex.from_pool(candidates, opportunities)
    edges = score_pool(candidates, opportunities, index, scorer)
    result = (strategy or AllocationEngine()).allocate(edges, opportunities)
    return MatchRun(index=index, edges=edges, result=result)
