"""Weighting, distribution and statistics calculations."""

from .weights import compute_weight, balance_weight, early_bonus, tenure_bonus
from .distribution import allocate, distribute, evaluate_holders, reserve_fees, DUST_THRESHOLD
from .stats import summarize

__all__ = [
    "compute_weight",
    "balance_weight",
    "early_bonus",
    "tenure_bonus",
    "allocate",
    "distribute",
    "evaluate_holders",
    "reserve_fees",
    "DUST_THRESHOLD",
    "summarize",
]
