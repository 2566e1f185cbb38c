"""Shared numeric conventions for scenario data.

Currency values are stored as integer cents to avoid floating point drift
($100.00 = 10000 cents). Rates are plain fractions (7% = 0.07).
"""

import math

Cents = int
Rate = float


def dollars_to_cents(dollars: float) -> Cents:
    """Convert dollars to integer cents, rounding half up."""
    return int(math.floor(dollars * 100 + 0.5))


def cents_to_dollars(cents: Cents) -> float:
    """Convert integer cents to dollars."""
    return cents / 100
