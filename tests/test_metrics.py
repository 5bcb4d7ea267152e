"""Tests for aggregate run metrics."""

import pytest

from smart_allocation.allocation.metrics import summarize


class TestSummarize:
    """Tests for summarize."""

    def test_empty_run(self) -> None:
        """Test an empty run gives zero metrics without dividing by zero."""
        metrics = summarize([], 0)

        assert metrics == {
            "total_matched": 0,
            "rural_representation": 0,
            "average_score": 0.0,
            "placement_rate": 0.0,
        }

    def test_no_matches_with_candidates(self) -> None:
        """Test unplaced candidates give a 0% placement rate."""
        assert summarize([], 4)["placement_rate"] == 0.0

    def test_metrics(self, make_edge) -> None:
        """Test counts, average and placement rate."""
        matches = [
            make_edge("s1", "i1", 0.8, rural=True),
            make_edge("s2", "i1", 0.6, rural=False),
            make_edge("s3", "i2", 0.4, rural=True),
        ]

        metrics = summarize(matches, 5)

        assert metrics["total_matched"] == 3
        assert metrics["rural_representation"] == 2
        assert metrics["average_score"] == pytest.approx(0.6)
        assert metrics["placement_rate"] == pytest.approx(60.0)
