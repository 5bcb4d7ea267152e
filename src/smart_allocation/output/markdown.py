"""Markdown output formatting."""

from pathlib import Path

from smart_allocation.models.state import AllocationState, RunMetrics
from smart_allocation.scoring.models import ScoredEdge


def save_markdown(content: str, output_path: str | Path) -> Path:
    """Save content to a markdown file.

    Args:
        content: Markdown content to save.
        output_path: Path to save the file.

    Returns:
        Path to the saved file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def format_metrics(metrics: RunMetrics) -> str:
    """Format run metrics as a markdown list."""
    output = ["### Run Metrics"]
    output.append(f"- **Matched:** {metrics['total_matched']}")
    output.append(f"- **Rural Representation:** {metrics['rural_representation']}")
    output.append(f"- **Average Score:** {metrics['average_score']:.1%}")
    output.append(f"- **Placement Rate:** {metrics['placement_rate']:.1f}%")
    return "\n".join(output)


def format_edge(edge: ScoredEdge) -> str:
    """Explain one scored edge: final score and every sub-score."""
    breakdown = edge.breakdown
    features = edge.features
    output = [f"### {edge.candidate_id} -> {edge.opportunity_id} (Score: {edge.score:.1%})"]
    output.append(f"- **Shape Score:** {breakdown.shape:.1%}")
    output.append(f"- **Rule-Based Score:** {breakdown.rule_based:.1%}")
    output.append(f"- **Lexical Similarity:** {breakdown.lexical:.1%}")
    output.append(f"- **Skill Overlap:** {features.skill_overlap:.0%}")
    if features.location_match:
        output.append("- Location match")
    if features.sector_match:
        output.append("- Sector match")
    if features.rural:
        output.append("- Rural / under-represented candidate")
    return "\n".join(output)


def format_allocation(state: AllocationState) -> str:
    """Format the complete allocation result for display.

    Args:
        state: Final workflow state.

    Returns:
        Formatted result string.
    """
    if state.get("errors"):
        return "Errors occurred:\n" + "\n".join(f"- {e}" for e in state["errors"])

    matches = state.get("matches") or []
    output = [f"## Allocation ({len(matches)} matches)", ""]

    if state.get("metrics"):
        output.append(format_metrics(state["metrics"]))
        output.append("")

    excluded = state.get("excluded_opportunities") or []
    if excluded:
        output.append(f"*Excluded (capacity < 1): {', '.join(excluded)}*")
        output.append("")

    for edge in matches:
        output.append(format_edge(edge))
        output.append("")

    return "\n".join(output).rstrip() + "\n"
