"""Candidate/opportunity pool loaded from ingestion output."""

from collections import Counter
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

from smart_allocation.models.candidate import Candidate
from smart_allocation.models.opportunity import Opportunity


class DuplicateIdentifierError(ValueError):
    """Raised when an identifier denotes more than one record in a run."""

    def __init__(self, kind: str, identifiers: list[str]) -> None:
        self.kind = kind
        self.identifiers = identifiers
        super().__init__(f"Duplicate {kind} id(s): {', '.join(identifiers)}")


def find_duplicates(ids: Iterable[str]) -> list[str]:
    """Return identifiers occurring more than once, sorted."""
    return sorted(key for key, count in Counter(ids).items() if count > 1)


def ensure_unique_ids(
    candidates: Iterable[Candidate],
    opportunities: Iterable[Opportunity],
) -> None:
    """Raise DuplicateIdentifierError if any id is reused within its kind."""
    dupes = find_duplicates(c.id for c in candidates)
    if dupes:
        raise DuplicateIdentifierError("candidate", dupes)
    dupes = find_duplicates(o.id for o in opportunities)
    if dupes:
        raise DuplicateIdentifierError("opportunity", dupes)


class CandidatePool(BaseModel):
    """All candidates and opportunities taking part in one matching run.

    Duplicate identifiers surface as a pydantic ValidationError when the
    pool is validated.
    """

    candidates: list[Candidate] = Field(default_factory=list)
    opportunities: list[Opportunity] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_ids(self) -> "CandidatePool":
        ensure_unique_ids(self.candidates, self.opportunities)
        return self

    @classmethod
    def from_json_file(cls, path: str | Path) -> "CandidatePool":
        """Load a pool from a JSON file."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))
