"""LangGraph workflow for candidate allocation."""

from smart_allocation.graph.workflow import create_allocation_graph, run_allocation

__all__ = ["create_allocation_graph", "run_allocation"]
