"""Data model for projected financial trajectories.

A trajectory is the year-by-year output of the projection engine for a
single scenario. Comparisons consume two of these (baseline and alternate)
and never modify them. All monetary fields are integer cents.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from model.common import Cents, Rate


@dataclass(frozen=True)
class TrajectoryYear:
    """Financial state at the end of a single calendar year."""
    year: int

    net_worth: Cents = 0
    gross_income: Cents = 0
    total_debt: Cents = 0
    total_assets: Cents = 0

    # Taxes
    tax_federal: Cents = 0
    tax_state: Cents = 0
    tax_fica: Cents = 0

    savings_rate: Rate = 0.0  # savings / net income, not clamped

    age: int = 0
    total_work_hours: int = 0
    total_interest_paid: Cents = 0  # interest paid on all debts during the year

    @property
    def total_taxes(self) -> Cents:
        return self.tax_federal + self.tax_state + self.tax_fica


@dataclass
class TrajectorySummary:
    """Whole-horizon statistics for a trajectory."""
    total_years: int = 0
    retirement_year: Optional[int] = None  # None if retirement is never reached
    retirement_age: Optional[int] = None
    total_lifetime_income: Cents = 0
    total_lifetime_taxes: Cents = 0
    total_lifetime_interest: Cents = 0
    net_worth_at_retirement: Cents = 0  # falls back to end of projection
    net_worth_at_end: Cents = 0
    total_lifetime_work_hours: int = 0


@dataclass
class Trajectory:
    """Complete projection for one scenario."""
    profile_id: str
    years: List[TrajectoryYear] = field(default_factory=list)
    summary: TrajectorySummary = field(default_factory=TrajectorySummary)

    def first_year(self) -> Optional[int]:
        return self.years[0].year if self.years else None

    def last_year(self) -> Optional[int]:
        return self.years[-1].year if self.years else None


def create_empty_trajectory_summary() -> TrajectorySummary:
    """Create a summary with zero totals and no retirement year."""
    return TrajectorySummary()


def summarize_years(years: Iterable[TrajectoryYear],
                    retirement_year: Optional[int] = None) -> TrajectorySummary:
    """Derive a TrajectorySummary from year records.

    Used when a trajectory arrives without precomputed totals. Net worth at
    retirement is read from the retirement year's record; when there is no
    such record it falls back to the last year of the projection.

    Args:
        years: Year records in calendar order
        retirement_year: Calendar year of retirement, or None if never

    Returns:
        TrajectorySummary with lifetime totals
    """
    years = list(years)
    summary = TrajectorySummary(total_years=len(years), retirement_year=retirement_year)
    if not years:
        return summary

    for yd in years:
        summary.total_lifetime_income += yd.gross_income
        summary.total_lifetime_taxes += yd.total_taxes
        summary.total_lifetime_interest += yd.total_interest_paid
        summary.total_lifetime_work_hours += yd.total_work_hours

    summary.net_worth_at_end = years[-1].net_worth
    summary.net_worth_at_retirement = summary.net_worth_at_end

    if retirement_year is not None:
        retired = next((yd for yd in years if yd.year == retirement_year), None)
        if retired is not None:
            summary.net_worth_at_retirement = retired.net_worth
            summary.retirement_age = retired.age or None

    return summary


def get_trajectory_year(trajectory: Trajectory, year: int) -> Optional[TrajectoryYear]:
    """Get the record for a specific calendar year."""
    return next((yd for yd in trajectory.years if yd.year == year), None)


def find_net_worth_milestone_year(trajectory: Trajectory, target_net_worth: Cents) -> Optional[int]:
    """Find the first year net worth reaches a target."""
    for yd in trajectory.years:
        if yd.net_worth >= target_net_worth:
            return yd.year
    return None


def find_debt_free_year(trajectory: Trajectory) -> Optional[int]:
    """Find the first year with no remaining debt."""
    for yd in trajectory.years:
        if yd.total_debt == 0:
            return yd.year
    return None
