"""Scoring model abstraction and its variants.

Every variant maps a FeatureVector to a single signal. None of them is trained:
the random shape function is a seeded, fixed nonlinear scorer. A trained model
can be added behind the same interface without touching the ensemble.
"""

from abc import ABC, abstractmethod
from typing import Literal

import numpy as np

from smart_allocation.scoring.models import FEATURE_NAMES, FeatureVector

ScoringModelKind = Literal["rule_based", "lexical", "random_shape", "trained"]


class ScoringModel(ABC):
    """Abstract base class for scoring models."""

    name: str = "base"

    @abstractmethod
    def score(self, features: FeatureVector) -> float:
        """Score one feature vector."""


class RuleBasedModel(ScoringModel):
    """Fixed weighted sum of the non-lexical features."""

    name = "rule_based"

    WEIGHTS = {
        "skill_overlap": 3.0,
        "aptitude": 2.0,
        "location_match": 1.5,
        "sector_match": 1.2,
        "portfolio": 1.0,
        "rural": 2.5,
        "education": 0.8,
    }
    NORMALIZER = 12.0  # Sum of WEIGHTS

    def score(self, features: FeatureVector) -> float:
        total = 0.0
        for feature, weight in self.WEIGHTS.items():
            total += getattr(features, feature) * weight
        return total / self.NORMALIZER


class LexicalOnlyModel(ScoringModel):
    """Pass-through of the corpus-based skill similarity."""

    name = "lexical"

    def score(self, features: FeatureVector) -> float:
        return features.lexical_similarity


def _sigmoid(x: np.ndarray) -> np.ndarray:
    return 1.0 / (1.0 + np.exp(-x))


class RandomShapeModel(ScoringModel):
    """Untrained one-hidden-layer sigmoid network with seeded random weights.

    Weights and biases are drawn uniformly from [-1, 1) once, at construction,
    and never change. Two instances built from the same seed score identically.

    Args:
        seed: Seed for ``numpy.random.default_rng``. Ignored when ``rng`` is given.
        hidden_size: Width of the hidden layer.
        rng: Explicit random generator to draw the weights from.
    """

    name = "random_shape"

    def __init__(
        self,
        seed: int | None = None,
        hidden_size: int = 12,
        rng: np.random.Generator | None = None,
    ) -> None:
        if hidden_size < 1:
            raise ValueError(f"hidden_size must be >= 1, got {hidden_size}")
        rng = rng if rng is not None else np.random.default_rng(seed)
        input_size = len(FEATURE_NAMES)

        self.seed = seed
        self.hidden_size = hidden_size
        self.weights_ih = rng.uniform(-1.0, 1.0, size=(hidden_size, input_size))
        self.weights_ho = rng.uniform(-1.0, 1.0, size=(1, hidden_size))
        self.bias_h = rng.uniform(-1.0, 1.0, size=hidden_size)
        self.bias_o = rng.uniform(-1.0, 1.0, size=1)
        for array in (self.weights_ih, self.weights_ho, self.bias_h, self.bias_o):
            array.setflags(write=False)

    def score(self, features: FeatureVector) -> float:
        inputs = np.asarray(features.as_list(), dtype=np.float64)
        hidden = _sigmoid(self.weights_ih @ inputs + self.bias_h)
        output = _sigmoid(self.weights_ho @ hidden + self.bias_o)
        return float(output[0])


def get_scoring_model(
    kind: ScoringModelKind,
    seed: int | None = None,
    hidden_size: int = 12,
) -> ScoringModel:
    """Factory function to get a scoring model instance."""
    if kind == "rule_based":
        return RuleBasedModel()
    elif kind == "lexical":
        return LexicalOnlyModel()
    elif kind == "random_shape":
        return RandomShapeModel(seed=seed, hidden_size=hidden_size)
    elif kind == "trained":
        raise NotImplementedError("No trained scoring model is available yet")
    else:
        raise ValueError(f"Unknown scoring model: {kind}")
