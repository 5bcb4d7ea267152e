"""Smart Allocation - capacity-constrained candidate to opportunity matching."""

__version__ = "0.1.0"
