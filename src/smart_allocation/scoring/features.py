"""Feature extraction for candidate-opportunity pairs.

Missing optional fields never raise; they fall back to the documented
defaults (no location or sector match, neutral education weight).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from smart_allocation.scoring.models import FeatureVector

if TYPE_CHECKING:
    from smart_allocation.models.candidate import Candidate
    from smart_allocation.models.opportunity import Opportunity
    from smart_allocation.scoring.lexical import LexicalIndex

EDUCATION_WEIGHTS: Mapping[str, float] = {
    "BTech": 0.8,
    "BE": 0.8,
    "BCom": 0.6,
    "MSc": 1.0,
    "BSc": 0.7,
}
DEFAULT_EDUCATION_WEIGHT = 0.5

DEFAULT_APTITUDE_MAX = 10.0
DEFAULT_PORTFOLIO_CAP = 5


def _same_tag(a: str | None, b: str | None) -> bool:
    if not a or not b:
        return False
    return a.casefold() == b.casefold()


class FeatureExtractor:
    """Turn (candidate, opportunity) pairs into feature vectors for one run."""

    def __init__(
        self,
        index: LexicalIndex,
        aptitude_max: float = DEFAULT_APTITUDE_MAX,
        portfolio_cap: int = DEFAULT_PORTFOLIO_CAP,
        education_weights: Mapping[str, float] | None = None,
    ) -> None:
        self.index = index
        self.aptitude_max = aptitude_max
        self.portfolio_cap = portfolio_cap
        self.education_weights = dict(education_weights or EDUCATION_WEIGHTS)
        self._education_folded = {k.casefold(): v for k, v in self.education_weights.items()}

    def extract(self, candidate: Candidate, opportunity: Opportunity) -> FeatureVector:
        """Compute the 8 features of one pair, in scoring order."""
        required = {skill.casefold() for skill in opportunity.required_skills}
        exact_matches = sum(1 for skill in candidate.skills if skill.casefold() in required)

        sectors = {sector.casefold() for sector in candidate.sectors}
        sector_match = bool(opportunity.sector) and opportunity.sector.casefold() in sectors

        portfolio = min(candidate.portfolio, self.portfolio_cap) / max(self.portfolio_cap, 1)

        return FeatureVector(
            lexical_similarity=self.index.similarity(candidate.skill_text, opportunity.skill_text),
            skill_overlap=exact_matches / max(len(opportunity.required_skills), 1),
            aptitude=candidate.aptitude / self.aptitude_max,
            location_match=1.0 if _same_tag(candidate.location, opportunity.location) else 0.0,
            sector_match=1.0 if sector_match else 0.0,
            portfolio=portfolio,
            rural=1.0 if candidate.demographic.rural else 0.0,
            education=self.education_weight(candidate.education),
        )

    def education_weight(self, education: str | None) -> float:
        """Look up an education tag, exact match first, then case-insensitively."""
        if not education:
            return DEFAULT_EDUCATION_WEIGHT
        if education in self.education_weights:
            return self.education_weights[education]
        return self._education_folded.get(education.strip().casefold(), DEFAULT_EDUCATION_WEIGHT)


def extract_features(
    candidate: Candidate,
    opportunity: Opportunity,
    index: LexicalIndex,
) -> FeatureVector:
    """Extract features with the default normalization constants."""
    return FeatureExtractor(index).extract(candidate, opportunity)
