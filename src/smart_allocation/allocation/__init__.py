"""Capacity-constrained allocation of scored candidate-opportunity pairs."""

from smart_allocation.allocation.greedy import (
    AllocationEngine,
    AllocationResult,
    AllocationStrategy,
    edge_sort_key,
    split_by_capacity,
)
from smart_allocation.allocation.metrics import summarize

__all__ = [
    "AllocationEngine",
    "AllocationResult",
    "AllocationStrategy",
    "edge_sort_key",
    "split_by_capacity",
    "summarize",
]
