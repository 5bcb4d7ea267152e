"""Tests for the ensemble scorer."""

import pytest

from smart_allocation.models.candidate import Candidate
from smart_allocation.models.opportunity import Opportunity
from smart_allocation.scoring.ensemble import EnsembleScorer
from smart_allocation.scoring.features import FeatureExtractor
from smart_allocation.scoring.lexical import LexicalIndex
from smart_allocation.scoring.models import FeatureVector, ScoredEdge
from smart_allocation.scoring.scorers import (
    LexicalOnlyModel,
    RandomShapeModel,
    RuleBasedModel,
)


@pytest.fixture
def pinned_scorer(constant_model) -> EnsembleScorer:
    """Scorer whose three signals are constants."""
    return EnsembleScorer(
        shape_model=constant_model(1.0),
        rule_model=constant_model(0.5),
        lexical_model=constant_model(0.2),
    )


class TestEnsembleWeights:
    """Tests for ensemble weight configuration."""

    def test_weights_sum_to_one(self) -> None:
        """Test that weight values sum to 1.0."""
        assert sum(EnsembleScorer.WEIGHTS.values()) == pytest.approx(1.0)

    def test_default_weights(self) -> None:
        """Test the documented blend."""
        assert EnsembleScorer.WEIGHTS == {"shape": 0.4, "rule_based": 0.35, "lexical": 0.25}

    def test_override_weights(self, sample_features: FeatureVector, constant_model) -> None:
        """Test partial weight overrides."""
        scorer = EnsembleScorer(
            shape_model=constant_model(1.0),
            rule_model=constant_model(0.0),
            lexical_model=constant_model(0.0),
            weights={"shape": 1.0},
        )
        assert scorer.evaluate(sample_features).final == pytest.approx(1.0)
        # Class defaults untouched
        assert EnsembleScorer.WEIGHTS["shape"] == 0.4

    def test_unknown_weight_raises(self) -> None:
        """Test unknown weight names are rejected."""
        with pytest.raises(ValueError, match="neural"):
            EnsembleScorer(seed=1, weights={"neural": 0.5})


class TestEvaluate:
    """Tests for EnsembleScorer.evaluate."""

    def test_final_blend(
        self, pinned_scorer: EnsembleScorer, sample_features: FeatureVector
    ) -> None:
        """Test final = 0.4 shape + 0.35 rule + 0.25 lexical."""
        breakdown = pinned_scorer.evaluate(sample_features)

        assert breakdown.shape == 1.0
        assert breakdown.rule_based == 0.5
        assert breakdown.lexical == 0.2
        assert breakdown.final == pytest.approx(0.4 + 0.175 + 0.05)

    def test_default_models(self) -> None:
        """Test default signal models."""
        scorer = EnsembleScorer(seed=3, hidden_size=6)

        assert isinstance(scorer.shape_model, RandomShapeModel)
        assert scorer.shape_model.hidden_size == 6
        assert isinstance(scorer.rule_model, RuleBasedModel)
        assert isinstance(scorer.lexical_model, LexicalOnlyModel)

    def test_real_signals(self, sample_features: FeatureVector) -> None:
        """Test the breakdown matches each model scored independently."""
        scorer = EnsembleScorer(seed=9)
        breakdown = scorer.evaluate(sample_features)

        assert breakdown.lexical == sample_features.lexical_similarity
        assert breakdown.rule_based == RuleBasedModel().score(sample_features)
        assert breakdown.shape == RandomShapeModel(seed=9).score(sample_features)

    def test_same_seed_identical(self, sample_features: FeatureVector) -> None:
        """Test two scorers with one seed agree bit for bit."""
        assert EnsembleScorer(seed=5).evaluate(sample_features) == EnsembleScorer(
            seed=5
        ).evaluate(sample_features)


class TestScorePairs:
    """Tests for pair and batch scoring."""

    def test_score_pair(self, pinned_scorer: EnsembleScorer, make_candidate, make_opportunity) -> None:
        """Test a scored edge carries ids, breakdown and features."""
        candidate = make_candidate("s1")
        opportunity = make_opportunity("i1")
        extractor = FeatureExtractor(LexicalIndex.from_pool([candidate], [opportunity]))

        edge = pinned_scorer.score_pair(candidate, opportunity, extractor)

        assert isinstance(edge, ScoredEdge)
        assert edge.candidate_id == "s1"
        assert edge.opportunity_id == "i1"
        assert edge.score == edge.breakdown.final
        assert edge.features == extractor.extract(candidate, opportunity)

    def test_score_all_candidate_major(
        self, pinned_scorer: EnsembleScorer, make_candidate, make_opportunity
    ) -> None:
        """Test every pair is scored once, in candidate-major order."""
        candidates = [make_candidate("s1"), make_candidate("s2")]
        opportunities = [make_opportunity("i1"), make_opportunity("i2"), make_opportunity("i3")]
        extractor = FeatureExtractor(LexicalIndex.from_pool(candidates, opportunities))

        edges = pinned_scorer.score_all(candidates, opportunities, extractor)

        assert [(e.candidate_id, e.opportunity_id) for e in edges] == [
            ("s1", "i1"),
            ("s1", "i2"),
            ("s1", "i3"),
            ("s2", "i1"),
            ("s2", "i2"),
            ("s2", "i3"),
        ]

    def test_score_all_empty(self, pinned_scorer: EnsembleScorer) -> None:
        """Test empty inputs give no edges."""
        extractor = FeatureExtractor(LexicalIndex.build([]))

        assert pinned_scorer.score_all([], [Opportunity(id="i1")], extractor) == []
        assert pinned_scorer.score_all([Candidate(id="s1")], [], extractor) == []
