"""Data models for Smart Allocation."""

from smart_allocation.models.candidate import Candidate, Demographics
from smart_allocation.models.opportunity import Opportunity
from smart_allocation.models.pool import CandidatePool, DuplicateIdentifierError
from smart_allocation.models.state import AllocationState, RunMetrics

__all__ = [
    "AllocationState",
    "Candidate",
    "CandidatePool",
    "Demographics",
    "DuplicateIdentifierError",
    "Opportunity",
    "RunMetrics",
]
