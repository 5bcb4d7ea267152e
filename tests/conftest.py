"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from smart_allocation.models.candidate import Candidate, Demographics
from smart_allocation.models.opportunity import Opportunity
from smart_allocation.models.pool import CandidatePool
from smart_allocation.scoring.models import FeatureVector, ScoreBreakdown, ScoredEdge
from smart_allocation.scoring.scorers import ScoringModel


class ConstantModel(ScoringModel):
    """Scoring model that ignores its input, for pinning a signal in tests."""

    name = "constant"

    def __init__(self, value: float) -> None:
        self.value = value

    def score(self, features: FeatureVector) -> float:
        return self.value


@pytest.fixture
def sample_pool_path() -> Path:
    """Path to the bundled sample pool."""
    return Path(__file__).parent.parent / "examples" / "sample_pool.json"


@pytest.fixture
def sample_pool(sample_pool_path: Path) -> CandidatePool:
    """Load the bundled sample pool."""
    return CandidatePool.from_json_file(sample_pool_path)


@pytest.fixture
def make_candidate() -> Callable[..., Candidate]:
    """Factory for candidates with neutral defaults."""

    def _make(id: str, **overrides: Any) -> Candidate:
        fields: dict[str, Any] = {
            "id": id,
            "name": f"Candidate {id}",
            "skills": ["Python"],
            "education": "BTech",
            "aptitude": 8.0,
            "location": "Urban",
            "sectors": ["IT"],
            "demographic": Demographics(rural=False, category="GEN"),
            "portfolio": 3,
        }
        fields.update(overrides)
        return Candidate(**fields)

    return _make


@pytest.fixture
def make_opportunity() -> Callable[..., Opportunity]:
    """Factory for opportunities with neutral defaults."""

    def _make(id: str, **overrides: Any) -> Opportunity:
        fields: dict[str, Any] = {
            "id": id,
            "organization": f"Org {id}",
            "role": f"Role {id}",
            "location": "Urban",
            "required_skills": ["Python"],
            "capacity": 1,
            "sector": "IT",
        }
        fields.update(overrides)
        return Opportunity(**fields)

    return _make


@pytest.fixture
def sample_features() -> FeatureVector:
    """A mid-range feature vector."""
    return FeatureVector(
        lexical_similarity=0.6,
        skill_overlap=2 / 3,
        aptitude=0.85,
        location_match=1.0,
        sector_match=0.0,
        portfolio=0.8,
        rural=1.0,
        education=0.8,
    )


@pytest.fixture
def make_edge(sample_features: FeatureVector) -> Callable[..., ScoredEdge]:
    """Factory for scored edges with a given final score."""

    def _make(candidate_id: str, opportunity_id: str, score: float, rural: bool = False) -> ScoredEdge:
        features = sample_features.model_copy(update={"rural": 1.0 if rural else 0.0})
        return ScoredEdge(
            candidate_id=candidate_id,
            opportunity_id=opportunity_id,
            score=score,
            breakdown=ScoreBreakdown(lexical=score, rule_based=score, shape=score, final=score),
            features=features,
        )

    return _make


@pytest.fixture
def constant_model() -> Callable[[float], ScoringModel]:
    """Factory for scoring models pinned to a constant value."""
    return ConstantModel
