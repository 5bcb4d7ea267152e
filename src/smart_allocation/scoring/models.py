"""Pydantic models for ensemble compatibility scoring."""

from pydantic import BaseModel, ConfigDict, Field

# Order of the numeric feature vector consumed by every scoring model
FEATURE_NAMES: tuple[str, ...] = (
    "lexical_similarity",
    "skill_overlap",
    "aptitude",
    "location_match",
    "sector_match",
    "portfolio",
    "rural",
    "education",
)


class FeatureVector(BaseModel):
    """Fixed 8-dimensional summary of one candidate-opportunity pair."""

    model_config = ConfigDict(frozen=True)

    lexical_similarity: float  # Corpus-weighted skill text similarity
    skill_overlap: float = Field(ge=0)  # Exact skill matches / required count
    aptitude: float  # Aptitude / aptitude max
    location_match: float = Field(ge=0, le=1)
    sector_match: float = Field(ge=0, le=1)
    portfolio: float = Field(ge=0, le=1)
    rural: float = Field(ge=0, le=1)
    education: float = Field(ge=0, le=1)

    def as_list(self) -> list[float]:
        """Return the features in scoring order."""
        return [getattr(self, name) for name in FEATURE_NAMES]


class ScoreBreakdown(BaseModel):
    """Labeled sub-scores behind one final compatibility score."""

    model_config = ConfigDict(frozen=True)

    lexical: float
    rule_based: float
    shape: float
    final: float


class ScoredEdge(BaseModel):
    """A scored (candidate, opportunity) pair, the allocator's unit of work."""

    model_config = ConfigDict(frozen=True)

    candidate_id: str
    opportunity_id: str
    score: float  # Final ensemble score, roughly 0-1 but not clamped
    breakdown: ScoreBreakdown
    features: FeatureVector
