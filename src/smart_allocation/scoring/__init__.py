"""Ensemble compatibility scoring for candidate-opportunity pairs.

Combines three signals:
- Corpus-weighted lexical similarity of skill texts
- A fixed rule-based weighted sum of pair features
- An untrained, seeded random shape function
"""

from smart_allocation.scoring.ensemble import EnsembleScorer
from smart_allocation.scoring.features import FeatureExtractor, extract_features
from smart_allocation.scoring.lexical import LexicalIndex, tokenize
from smart_allocation.scoring.models import (
    FEATURE_NAMES,
    FeatureVector,
    ScoreBreakdown,
    ScoredEdge,
)
from smart_allocation.scoring.scorers import (
    LexicalOnlyModel,
    RandomShapeModel,
    RuleBasedModel,
    ScoringModel,
    get_scoring_model,
)

__all__ = [
    "FEATURE_NAMES",
    "EnsembleScorer",
    "FeatureExtractor",
    "FeatureVector",
    "LexicalIndex",
    "LexicalOnlyModel",
    "RandomShapeModel",
    "RuleBasedModel",
    "ScoreBreakdown",
    "ScoredEdge",
    "ScoringModel",
    "extract_features",
    "get_scoring_model",
    "tokenize",
]
