"""Data model for comparing two financial trajectories.

A comparison pairs a baseline trajectory with an alternate "what-if"
trajectory. Per-year differences are kept as YearDelta records and the
whole-horizon differences as a ComparisonSummary. All monetary deltas are
signed integer cents computed as alternate minus baseline.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List

from model.common import Cents
from model.Trajectory import Trajectory


@dataclass(frozen=True)
class YearDelta:
    """Difference between baseline and alternate for one calendar year."""
    year: int
    net_worth_delta: Cents = 0
    income_delta: Cents = 0
    debt_delta: Cents = 0
    assets_delta: Cents = 0
    taxes_delta: Cents = 0
    savings_rate_delta: float = 0.0


@dataclass
class ComparisonSummary:
    """Key whole-horizon differences between two trajectories.

    Left mutable so callers can start from an empty summary and fill in
    fields as they are computed.
    """
    retirement_date_delta: int = 0  # months, negative = alternate retires earlier
    lifetime_interest_delta: Cents = 0
    net_worth_at_retirement_delta: Cents = 0
    total_work_hours_delta: int = 0
    net_worth_at_end_delta: Cents = 0
    key_insight: str = ''  # one-sentence headline, empty until computed


@dataclass
class Change:
    """A single input that differs between baseline and alternate."""
    field: str  # field path, e.g. "income[0].amount"
    original_value: Any
    new_value: Any
    description: str


@dataclass
class Comparison:
    """Complete comparison between two trajectories."""
    id: str
    name: str
    baseline: Trajectory
    alternate: Trajectory
    changes: List[Change] = field(default_factory=list)
    deltas: List[YearDelta] = field(default_factory=list)
    summary: ComparisonSummary = field(default_factory=ComparisonSummary)
    created_at: datetime = field(default_factory=datetime.now)


def create_empty_comparison_summary() -> ComparisonSummary:
    """Create a summary representing no difference between scenarios."""
    return ComparisonSummary()


def create_empty_year_delta(year: int) -> YearDelta:
    """Create an all-zero delta for the given year."""
    return YearDelta(year=year)


def calculate_year_delta(baseline_year, alternate_year) -> YearDelta:
    """Calculate the delta between two records for the same calendar year.

    The caller is responsible for aligning the two records; the alternate
    record does not need a ``year`` attribute since it is taken from the
    baseline.

    Args:
        baseline_year: Baseline record (TrajectoryYear or any object with the same fields)
        alternate_year: Alternate record for the same year

    Returns:
        YearDelta with every field computed as alternate minus baseline
    """
    total_taxes_baseline = baseline_year.tax_federal + baseline_year.tax_state + baseline_year.tax_fica
    total_taxes_alternate = alternate_year.tax_federal + alternate_year.tax_state + alternate_year.tax_fica

    return YearDelta(
        year=baseline_year.year,
        net_worth_delta=alternate_year.net_worth - baseline_year.net_worth,
        income_delta=alternate_year.gross_income - baseline_year.gross_income,
        debt_delta=alternate_year.total_debt - baseline_year.total_debt,
        assets_delta=alternate_year.total_assets - baseline_year.total_assets,
        taxes_delta=total_taxes_alternate - total_taxes_baseline,
        savings_rate_delta=alternate_year.savings_rate - baseline_year.savings_rate,
    )
