"""Capacity-constrained greedy allocation of scored edges.

A single score-descending pass over all edges, accepting an edge when its
candidate is still unplaced and its opportunity still has capacity. This is
a heuristic for weighted bipartite b-matching: it neither maximizes the total
score nor guarantees stability.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from smart_allocation.scoring.models import ScoredEdge

if TYPE_CHECKING:
    from smart_allocation.models.opportunity import Opportunity

logger = logging.getLogger(__name__)


class AllocationResult(BaseModel):
    """Accepted edges plus the bookkeeping needed to explain them."""

    matches: list[ScoredEdge] = Field(default_factory=list)  # Acceptance order
    excluded_opportunities: list[str] = Field(default_factory=list)  # Capacity < 1
    total_edges: int = 0


def edge_sort_key(edge: ScoredEdge) -> tuple[float, str, str]:
    """Total order: score descending, then candidate id, then opportunity id."""
    return (-edge.score, edge.candidate_id, edge.opportunity_id)


def split_by_capacity(
    opportunities: Iterable[Opportunity],
) -> tuple[list[Opportunity], list[str]]:
    """Separate allocatable opportunities from those with capacity < 1.

    Returns:
        Tuple of (eligible opportunities, ids of excluded opportunities).
    """
    eligible: list[Opportunity] = []
    excluded: list[str] = []
    for opportunity in opportunities:
        if opportunity.capacity < 1:
            logger.warning(
                f"Excluding opportunity {opportunity.id}: invalid capacity {opportunity.capacity}"
            )
            excluded.append(opportunity.id)
        else:
            eligible.append(opportunity)
    return eligible, excluded


class AllocationStrategy(ABC):
    """Turns a full scored edge set into a feasible assignment."""

    @abstractmethod
    def allocate(
        self,
        edges: Sequence[ScoredEdge],
        opportunities: Sequence[Opportunity],
    ) -> AllocationResult:
        """Select edges such that each candidate appears at most once and no
        opportunity exceeds its capacity."""


class AllocationEngine(AllocationStrategy):
    """Deterministic greedy allocator."""

    def allocate(
        self,
        edges: Sequence[ScoredEdge],
        opportunities: Sequence[Opportunity],
    ) -> AllocationResult:
        eligible, excluded = split_by_capacity(opportunities)
        capacity = {o.id: o.capacity for o in eligible}
        used: dict[str, int] = dict.fromkeys(capacity, 0)
        placed: set[str] = set()
        matches: list[ScoredEdge] = []

        for edge in sorted(edges, key=edge_sort_key):
            # Edges to excluded or unknown opportunities never match
            if edge.opportunity_id not in capacity:
                continue
            if edge.candidate_id in placed:
                continue
            if used[edge.opportunity_id] >= capacity[edge.opportunity_id]:
                continue

            placed.add(edge.candidate_id)
            used[edge.opportunity_id] += 1
            matches.append(edge)
            logger.debug(
                f"Accepted {edge.candidate_id} -> {edge.opportunity_id} (score {edge.score:.3f})"
            )

        logger.info(f"Accepted {len(matches)} of {len(edges)} scored edges")
        return AllocationResult(
            matches=matches,
            excluded_opportunities=excluded,
            total_edges=len(edges),
        )
