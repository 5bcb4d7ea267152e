"""Tabular CSV export of accepted matches."""

import csv
import io
from collections.abc import Sequence
from pathlib import Path

from smart_allocation.models.candidate import Candidate
from smart_allocation.models.opportunity import Opportunity
from smart_allocation.scoring.models import ScoredEdge

CSV_HEADER = [
    "Candidate",
    "Opportunity",
    "Score",
    "Shape",
    "Rule_Based",
    "Lexical",
    "Skill_Match",
    "Aptitude",
    "Location",
    "Sector",
    "Portfolio",
    "Rural",
]


def to_csv(
    matches: Sequence[ScoredEdge],
    candidates: Sequence[Candidate],
    opportunities: Sequence[Opportunity],
) -> str:
    """Render matches as CSV, one row per accepted edge.

    Candidate and opportunity columns show the display name and role title,
    falling back to the id when the record is not supplied.
    """
    names = {c.id: c.name or c.id for c in candidates}
    roles = {o.id: o.role or o.id for o in opportunities}

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for match in matches:
        features = match.features
        writer.writerow(
            [
                names.get(match.candidate_id, match.candidate_id),
                roles.get(match.opportunity_id, match.opportunity_id),
                f"{match.score:.3f}",
                f"{match.breakdown.shape:.3f}",
                f"{match.breakdown.rule_based:.3f}",
                f"{match.breakdown.lexical:.3f}",
                f"{features.skill_overlap:.2f}",
                f"{features.aptitude:.2f}",
                f"{features.location_match:g}",
                f"{features.sector_match:g}",
                f"{features.portfolio:.2f}",
                f"{features.rural:g}",
            ]
        )
    return buffer.getvalue()


def save_csv(content: str, output_path: str | Path) -> Path:
    """Save CSV content to a file, creating parent directories."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8", newline="")
    return path
