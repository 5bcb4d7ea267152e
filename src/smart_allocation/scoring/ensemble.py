"""Ensemble scorer combining lexical, rule-based and shape signals."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from smart_allocation.scoring.models import FeatureVector, ScoreBreakdown, ScoredEdge
from smart_allocation.scoring.scorers import (
    LexicalOnlyModel,
    RandomShapeModel,
    RuleBasedModel,
    ScoringModel,
)

if TYPE_CHECKING:
    from smart_allocation.models.candidate import Candidate
    from smart_allocation.models.opportunity import Opportunity
    from smart_allocation.scoring.features import FeatureExtractor

logger = logging.getLogger(__name__)


class EnsembleScorer:
    """Weighted combination of three independently computed signals.

    The shape model is built once per scorer, so every pair scored by one
    instance sees the same network weights.
    """

    WEIGHTS = {
        "shape": 0.4,
        "rule_based": 0.35,
        "lexical": 0.25,
    }

    def __init__(
        self,
        shape_model: ScoringModel | None = None,
        rule_model: ScoringModel | None = None,
        lexical_model: ScoringModel | None = None,
        weights: Mapping[str, float] | None = None,
        seed: int | None = None,
        hidden_size: int = 12,
    ) -> None:
        self.shape_model = shape_model or RandomShapeModel(seed=seed, hidden_size=hidden_size)
        self.rule_model = rule_model or RuleBasedModel()
        self.lexical_model = lexical_model or LexicalOnlyModel()

        self.weights = dict(self.WEIGHTS)
        if weights:
            unknown = set(weights) - set(self.WEIGHTS)
            if unknown:
                raise ValueError(f"Unknown ensemble weight(s): {', '.join(sorted(unknown))}")
            self.weights.update(weights)

    def evaluate(self, features: FeatureVector) -> ScoreBreakdown:
        """Compute every sub-score and the weighted final score."""
        lexical = self.lexical_model.score(features)
        rule_based = self.rule_model.score(features)
        shape = self.shape_model.score(features)

        final = (
            self.weights["shape"] * shape
            + self.weights["rule_based"] * rule_based
            + self.weights["lexical"] * lexical
        )
        return ScoreBreakdown(lexical=lexical, rule_based=rule_based, shape=shape, final=final)

    def score_pair(
        self,
        candidate: Candidate,
        opportunity: Opportunity,
        extractor: FeatureExtractor,
    ) -> ScoredEdge:
        """Extract features for one pair and score them."""
        features = extractor.extract(candidate, opportunity)
        breakdown = self.evaluate(features)
        return ScoredEdge(
            candidate_id=candidate.id,
            opportunity_id=opportunity.id,
            score=breakdown.final,
            breakdown=breakdown,
            features=features,
        )

    def score_all(
        self,
        candidates: Sequence[Candidate],
        opportunities: Sequence[Opportunity],
        extractor: FeatureExtractor,
    ) -> list[ScoredEdge]:
        """Score every (candidate, opportunity) pair, candidate-major."""
        edges = [
            self.score_pair(candidate, opportunity, extractor)
            for candidate in candidates
            for opportunity in opportunities
        ]
        logger.info(
            f"Scored {len(edges)} pairs "
            f"({len(candidates)} candidates x {len(opportunities)} opportunities)"
        )
        return edges
