"""LangGraph state models."""

from typing import TypedDict

from smart_allocation.models.candidate import Candidate
from smart_allocation.models.opportunity import Opportunity
from smart_allocation.scoring.lexical import LexicalIndex
from smart_allocation.scoring.models import ScoredEdge


class RunMetrics(TypedDict):
    """Aggregate metrics of one allocation run."""

    total_matched: int
    rural_representation: int  # Accepted matches whose candidate is rural
    average_score: float
    placement_rate: float  # Percentage of candidates placed (0-100)


class StepTiming(TypedDict):
    """Timing information for a single workflow step."""

    step_name: str
    start_time: float  # Unix timestamp
    end_time: float | None  # Unix timestamp, None if in progress
    duration_seconds: float | None  # Computed duration


class AllocationState(TypedDict):
    """Main state object for the allocation workflow."""

    # Input data
    candidates: list[Candidate]
    opportunities: list[Opportunity]

    # Settings
    seed: int

    # Scoring results
    index: LexicalIndex | None  # Read-only after the build_index step
    edges: list[ScoredEdge]  # Every scored (candidate, eligible opportunity) pair

    # Allocation results
    matches: list[ScoredEdge]  # Accepted edges in acceptance order
    excluded_opportunities: list[str]
    metrics: RunMetrics | None

    # Timing information
    step_timings: list[StepTiming]
    current_step_start: float | None
    total_run_time: float | None

    # Workflow tracking
    current_step: str
    current_step_description: str
    errors: list[str]
