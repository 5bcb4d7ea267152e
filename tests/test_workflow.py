"""Tests for LangGraph workflow assembly and execution."""

from unittest.mock import patch

import pytest

from smart_allocation.config import Settings
from smart_allocation.engine import match_pool
from smart_allocation.graph.workflow import create_allocation_graph, run_allocation
from smart_allocation.models.pool import CandidatePool


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the environment."""
    return Settings(_env_file=None, seed=42, hidden_size=12)


class TestCreateAllocationGraph:
    """Tests for the create_allocation_graph function."""

    def test_graph_has_pipeline_nodes(self) -> None:
        """Test the compiled graph contains every step."""
        graph = create_allocation_graph(seed=1)
        nodes = set(graph.get_graph().nodes)

        assert {"validate_inputs", "build_index", "score_pairs", "allocate", "summarize"} <= nodes

    @patch("smart_allocation.graph.workflow.get_settings")
    def test_uses_settings_seed(self, mock_settings, settings: Settings) -> None:
        """Test the configured seed is used when none is given."""
        mock_settings.return_value = settings

        with patch("smart_allocation.graph.workflow.EnsembleScorer") as mock_scorer:
            create_allocation_graph()

        mock_scorer.assert_called_once_with(seed=42, hidden_size=12)


class TestRunAllocation:
    """Tests for run_allocation."""

    def test_sample_pool(self, sample_pool: CandidatePool) -> None:
        """Test a full run populates matches, edges and metrics."""
        state = run_allocation(sample_pool.candidates, sample_pool.opportunities, seed=42)

        assert state["errors"] == []
        assert len(state["edges"]) == 20
        assert len(state["matches"]) == 5
        assert state["metrics"]["total_matched"] == 5
        assert state["metrics"]["placement_rate"] == pytest.approx(100.0)
        assert state["index"].size == 9
        assert state["total_run_time"] is not None
        assert [t["step_name"] for t in state["step_timings"]] == [
            "validate_inputs",
            "build_index",
            "score_pairs",
            "allocate",
            "summarize",
        ]

    def test_matches_plain_engine(self, sample_pool: CandidatePool) -> None:
        """Test the graph and the plain engine agree exactly."""
        state = run_allocation(sample_pool.candidates, sample_pool.opportunities, seed=7)
        run = match_pool(sample_pool.candidates, sample_pool.opportunities, seed=7)

        assert state["matches"] == run.result.matches

    def test_rural_representation(self, sample_pool: CandidatePool) -> None:
        """Test rural count is derived from the accepted matches."""
        state = run_allocation(sample_pool.candidates, sample_pool.opportunities, seed=42)
        rural_ids = {c.id for c in sample_pool.candidates if c.demographic.rural}

        expected = sum(1 for m in state["matches"] if m.candidate_id in rural_ids)
        assert state["metrics"]["rural_representation"] == expected

    def test_empty_pool(self) -> None:
        """Test an empty pool yields empty results and zero metrics."""
        state = run_allocation([], [], seed=42)

        assert state["errors"] == []
        assert state["matches"] == []
        assert state["metrics"]["total_matched"] == 0
        assert state["metrics"]["average_score"] == 0.0

    def test_duplicate_ids_stop_the_run(self, make_candidate, make_opportunity) -> None:
        """Test validation errors end the run before scoring."""
        state = run_allocation(
            [make_candidate("s1"), make_candidate("s1")],
            [make_opportunity("i1")],
            seed=42,
        )

        assert state["errors"] == ["Duplicate candidate id(s): s1"]
        assert state["edges"] == []
        assert state["matches"] == []
        assert state["metrics"] is None

    def test_excluded_opportunities_reported(self, make_candidate, make_opportunity) -> None:
        """Test capacity < 1 opportunities are reported, not matched."""
        state = run_allocation(
            [make_candidate("s1")],
            [make_opportunity("i0", capacity=0), make_opportunity("i1")],
            seed=42,
        )

        assert state["excluded_opportunities"] == ["i0"]
        assert [m.opportunity_id for m in state["matches"]] == ["i1"]

    def test_progress_callback(self, sample_pool: CandidatePool) -> None:
        """Test progress is reported for each step, in order."""
        calls: list[tuple[str, str, float]] = []

        state = run_allocation(
            sample_pool.candidates,
            sample_pool.opportunities,
            seed=42,
            progress_callback=lambda name, desc, elapsed: calls.append((name, desc, elapsed)),
        )

        assert [c[0] for c in calls] == [
            "validate_inputs",
            "build_index",
            "score_pairs",
            "allocate",
            "summarize",
        ]
        assert all(c[2] >= 0 for c in calls)
        assert len(state["matches"]) == 5
        assert state["total_run_time"] is not None
