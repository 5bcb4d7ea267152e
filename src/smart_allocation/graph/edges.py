"""Conditional edge functions for LangGraph workflow."""

from typing import Literal

from smart_allocation.models.state import AllocationState


def should_continue_after_validation(
    state: AllocationState,
) -> Literal["continue", "error"]:
    """Check if validation passed.

    Args:
        state: Current workflow state.

    Returns:
        "continue" if no errors, "error" otherwise.
    """
    if state.get("errors") and len(state["errors"]) > 0:
        return "error"
    return "continue"
