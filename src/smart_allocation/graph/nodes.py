"""LangGraph node definitions for the allocation workflow."""

import logging
import time
from collections.abc import Callable

from smart_allocation.allocation.greedy import AllocationStrategy
from smart_allocation.allocation.metrics import summarize
from smart_allocation.models.pool import DuplicateIdentifierError, ensure_unique_ids
from smart_allocation.models.state import AllocationState, StepTiming
from smart_allocation.scoring.ensemble import EnsembleScorer
from smart_allocation.scoring.features import FeatureExtractor
from smart_allocation.scoring.lexical import LexicalIndex

logger = logging.getLogger(__name__)

# Step descriptions for progress display
STEP_DESCRIPTIONS = {
    "validate_inputs": "Checking candidate and opportunity identifiers...",
    "build_index": "Building skill corpus statistics...",
    "score_pairs": "Scoring every candidate-opportunity pair...",
    "allocate": "Allocating candidates to capacity...",
    "summarize": "Computing run metrics...",
}


def _start_step(
    step_name: str,
    on_step_start: Callable[[str, str], None] | None = None,
) -> dict:
    """Record step start time and description."""
    description = STEP_DESCRIPTIONS.get(step_name, f"Running {step_name}...")

    if on_step_start:
        on_step_start(step_name, description)

    return {
        "current_step": step_name,
        "current_step_description": description,
        "current_step_start": time.time(),
    }


def _end_step(state: AllocationState, step_name: str, updates: dict) -> dict:
    """Record step end time and compute duration."""
    end_time = time.time()
    start_time = updates.get("current_step_start")

    timing = StepTiming(
        step_name=step_name,
        start_time=start_time or end_time,
        end_time=end_time,
        duration_seconds=end_time - start_time if start_time else 0,
    )
    updates["step_timings"] = state.get("step_timings", []) + [timing]
    return updates


def create_nodes(
    scorer: EnsembleScorer,
    strategy: AllocationStrategy,
    aptitude_max: float,
    portfolio_cap: int,
    on_step_start: Callable[[str, str], None] | None = None,
) -> dict:
    """Create all workflow nodes.

    Args:
        scorer: Ensemble scorer shared by every pair of the run.
        strategy: Allocation strategy for the scored edges.
        aptitude_max: Maximum aptitude score used for normalization.
        portfolio_cap: Portfolio strength cap used for normalization.
        on_step_start: Optional callback(step_name, description) fired when a step starts.

    Returns:
        dict: Dictionary of node functions.
    """

    def validate_inputs(state: AllocationState) -> dict:
        """Reject runs where an identifier denotes more than one record."""
        step_name = "validate_inputs"
        result = _start_step(step_name, on_step_start)
        errors = list(state.get("errors") or [])

        try:
            ensure_unique_ids(state["candidates"], state["opportunities"])
        except DuplicateIdentifierError as e:
            logger.error(str(e))
            errors.append(str(e))

        result["errors"] = errors
        return _end_step(state, step_name, result)

    def build_index(state: AllocationState) -> dict:
        """Build the lexical index from every skill and requirement text."""
        step_name = "build_index"
        result = _start_step(step_name, on_step_start)
        result["index"] = LexicalIndex.from_pool(state["candidates"], state["opportunities"])
        return _end_step(state, step_name, result)

    def score_pairs(state: AllocationState) -> dict:
        """Score every candidate against every eligible opportunity."""
        step_name = "score_pairs"
        result = _start_step(step_name, on_step_start)

        extractor = FeatureExtractor(
            state["index"],
            aptitude_max=aptitude_max,
            portfolio_cap=portfolio_cap,
        )
        eligible = [o for o in state["opportunities"] if o.capacity >= 1]
        result["edges"] = scorer.score_all(state["candidates"], eligible, extractor)
        return _end_step(state, step_name, result)

    def allocate(state: AllocationState) -> dict:
        """Select the final one-assignment-per-candidate matches."""
        step_name = "allocate"
        result = _start_step(step_name, on_step_start)

        allocation = strategy.allocate(state["edges"], state["opportunities"])
        result["matches"] = allocation.matches
        result["excluded_opportunities"] = allocation.excluded_opportunities
        return _end_step(state, step_name, result)

    def summarize_run(state: AllocationState) -> dict:
        """Derive aggregate metrics from the accepted matches."""
        step_name = "summarize"
        result = _start_step(step_name, on_step_start)
        result["metrics"] = summarize(state["matches"], len(state["candidates"]))
        return _end_step(state, step_name, result)

    return {
        "validate_inputs": validate_inputs,
        "build_index": build_index,
        "score_pairs": score_pairs,
        "allocate": allocate,
        "summarize": summarize_run,
    }
