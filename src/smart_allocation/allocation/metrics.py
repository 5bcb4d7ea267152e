"""Aggregate run metrics derived from accepted matches."""

from collections.abc import Sequence

from smart_allocation.models.state import RunMetrics
from smart_allocation.scoring.models import ScoredEdge


def summarize(matches: Sequence[ScoredEdge], candidate_count: int) -> RunMetrics:
    """Summarize one allocation run.

    Uses only the per-edge feature snapshot, so no re-scoring is needed.

    Args:
        matches: Accepted edges.
        candidate_count: Number of candidates that took part in the run.

    Returns:
        RunMetrics; all zeros for an empty run.
    """
    total = len(matches)
    rural = sum(1 for m in matches if m.features.rural >= 1.0)
    average = sum(m.score for m in matches) / total if total else 0.0
    placement_rate = total / candidate_count * 100 if candidate_count else 0.0

    return RunMetrics(
        total_matched=total,
        rural_representation=rural,
        average_score=average,
        placement_rate=placement_rate,
    )
