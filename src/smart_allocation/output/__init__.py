"""Output formatting for allocation results."""
