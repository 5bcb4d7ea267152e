"""Main LangGraph workflow assembly.

The run is a straight pipeline: validate identifiers, build the lexical index
over the whole pool, score every pair, allocate, then summarize. A failed
validation ends the run with the errors recorded in state.
"""

import time
from collections.abc import Callable, Sequence

from langgraph.graph import END, START, StateGraph

from smart_allocation.allocation.greedy import AllocationEngine, AllocationStrategy
from smart_allocation.config import get_settings
from smart_allocation.graph.edges import should_continue_after_validation
from smart_allocation.graph.nodes import STEP_DESCRIPTIONS, create_nodes
from smart_allocation.models.candidate import Candidate
from smart_allocation.models.opportunity import Opportunity
from smart_allocation.models.state import AllocationState
from smart_allocation.scoring.ensemble import EnsembleScorer


def create_allocation_graph(
    seed: int | None = None,
    scorer: EnsembleScorer | None = None,
    strategy: AllocationStrategy | None = None,
    on_step_start: Callable[[str, str], None] | None = None,
) -> StateGraph:
    """Create and compile the allocation workflow graph.

    Args:
        seed: Seed for the shape-scoring weights. Falls back to settings.
        scorer: Prebuilt ensemble scorer; overrides ``seed`` when given.
        strategy: Allocation strategy. Defaults to the greedy engine.
        on_step_start: Optional callback(step_name, description) fired when a step starts.

    Returns:
        Compiled StateGraph.
    """
    settings = get_settings()

    if scorer is None:
        scorer = EnsembleScorer(
            seed=settings.seed if seed is None else seed,
            hidden_size=settings.hidden_size,
        )

    nodes = create_nodes(
        scorer,
        strategy or AllocationEngine(),
        aptitude_max=settings.aptitude_max,
        portfolio_cap=settings.portfolio_cap,
        on_step_start=on_step_start,
    )

    workflow = StateGraph(AllocationState)

    workflow.add_node("validate_inputs", nodes["validate_inputs"])
    workflow.add_node("build_index", nodes["build_index"])
    workflow.add_node("score_pairs", nodes["score_pairs"])
    workflow.add_node("allocate", nodes["allocate"])
    workflow.add_node("summarize", nodes["summarize"])

    workflow.add_edge(START, "validate_inputs")
    workflow.add_conditional_edges(
        "validate_inputs",
        should_continue_after_validation,
        {
            "continue": "build_index",
            "error": END,
        },
    )
    workflow.add_edge("build_index", "score_pairs")
    workflow.add_edge("score_pairs", "allocate")
    workflow.add_edge("allocate", "summarize")
    workflow.add_edge("summarize", END)

    return workflow.compile()


def run_allocation(
    candidates: Sequence[Candidate],
    opportunities: Sequence[Opportunity],
    seed: int | None = None,
    scorer: EnsembleScorer | None = None,
    strategy: AllocationStrategy | None = None,
    progress_callback: Callable[[str, str, float], None] | None = None,
) -> AllocationState:
    """Run the allocation workflow.

    Args:
        candidates: Validated candidate records.
        opportunities: Validated opportunity records.
        seed: Shape-scoring seed. Same seed and inputs give identical results.
        scorer: Prebuilt ensemble scorer; overrides ``seed`` when given.
        strategy: Allocation strategy. Defaults to the greedy engine.
        progress_callback: Optional callback function(step_name, description, elapsed_seconds)
                          called after each step completes.

    Returns:
        Final workflow state with matches and metrics.
    """
    settings = get_settings()
    graph = create_allocation_graph(seed=seed, scorer=scorer, strategy=strategy)

    initial_state: AllocationState = {
        "candidates": list(candidates),
        "opportunities": list(opportunities),
        "seed": settings.seed if seed is None else seed,
        "index": None,
        "edges": [],
        "matches": [],
        "excluded_opportunities": [],
        "metrics": None,
        "step_timings": [],
        "current_step_start": None,
        "total_run_time": None,
        "current_step": "start",
        "current_step_description": "Initializing...",
        "errors": [],
    }

    start_time = time.time()

    if progress_callback:
        final_state = dict(initial_state)
        for event in graph.stream(initial_state, stream_mode="updates"):
            for node_name, node_output in event.items():
                elapsed = time.time() - start_time
                if node_name in STEP_DESCRIPTIONS:
                    progress_callback(node_name, STEP_DESCRIPTIONS[node_name], elapsed)
                if isinstance(node_output, dict):
                    final_state.update(node_output)

        final_state["total_run_time"] = time.time() - start_time
        return final_state
    else:
        result = graph.invoke(initial_state)
        result["total_run_time"] = time.time() - start_time
        return result
