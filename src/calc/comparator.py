import logging
import uuid
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional, Sequence

from model.common import Cents
from model.Comparison import (
    Change,
    Comparison,
    ComparisonSummary,
    YearDelta,
    calculate_year_delta,
    create_empty_comparison_summary,
)
from model.Trajectory import Trajectory, TrajectorySummary, TrajectoryYear, get_trajectory_year
from render.formatters import get_most_significant_change


logger = logging.getLogger(__name__)


@dataclass
class CumulativeImpact:
    """Impact of the alternate scenario over a range of years."""
    total_net_worth_delta: Cents  # delta in the last year of the range, not a sum
    total_income_delta: Cents
    total_taxes_delta: Cents
    average_yearly_benefit: Cents


@dataclass
class YearComparison:
    """Baseline, alternate and delta records for one year."""
    baseline_year: Optional[TrajectoryYear]
    alternate_year: Optional[TrajectoryYear]
    delta: Optional[YearDelta]


def calculate_year_deltas(baseline_years: Sequence[TrajectoryYear],
                          alternate_years: Sequence[TrajectoryYear]) -> List[YearDelta]:
    """Calculate a YearDelta for every calendar year present in both trajectories.

    Records are aligned by calendar year, not by position. Years that only
    one side covers are skipped.

    Args:
        baseline_years: Baseline year records
        alternate_years: Alternate year records

    Returns:
        List of YearDelta in baseline order
    """
    alternate_by_year = {yd.year: yd for yd in alternate_years}
    deltas = []
    for baseline_year in baseline_years:
        alternate_year = alternate_by_year.get(baseline_year.year)
        if alternate_year is not None:
            deltas.append(calculate_year_delta(baseline_year, alternate_year))
    return deltas


def build_comparison_summary(baseline: TrajectorySummary,
                             alternate: TrajectorySummary) -> ComparisonSummary:
    """Build the whole-horizon summary from two trajectory summaries.

    The retirement delta is only known when both scenarios reach
    retirement; otherwise it stays zero.

    Args:
        baseline: Summary of the baseline trajectory
        alternate: Summary of the alternate trajectory

    Returns:
        ComparisonSummary with its key insight filled in
    """
    summary = create_empty_comparison_summary()

    if baseline.retirement_year is not None and alternate.retirement_year is not None:
        summary.retirement_date_delta = (alternate.retirement_year - baseline.retirement_year) * 12

    summary.lifetime_interest_delta = alternate.total_lifetime_interest - baseline.total_lifetime_interest
    summary.net_worth_at_retirement_delta = alternate.net_worth_at_retirement - baseline.net_worth_at_retirement
    summary.total_work_hours_delta = alternate.total_lifetime_work_hours - baseline.total_lifetime_work_hours
    summary.net_worth_at_end_delta = alternate.net_worth_at_end - baseline.net_worth_at_end
    summary.key_insight = get_most_significant_change(summary)
    return summary


def compare_trajectories(baseline: Trajectory,
                         alternate: Trajectory,
                         changes: Optional[List[Change]] = None,
                         name: str = 'Comparison') -> Comparison:
    """Compare a baseline trajectory with an alternate one."""
    comparison = Comparison(
        id=str(uuid.uuid4()),
        name=name,
        baseline=baseline,
        alternate=alternate,
        changes=list(changes or []),
        deltas=calculate_year_deltas(baseline.years, alternate.years),
        summary=build_comparison_summary(baseline.summary, alternate.summary),
    )
    logger.debug("Compared %d aligned years for '%s': %s",
                 len(comparison.deltas), name, comparison.summary.key_insight)
    return comparison


def find_max_divergence_year(deltas: Sequence[YearDelta]) -> Optional[YearDelta]:
    """Find the year with the largest absolute net worth difference."""
    max_delta = None
    for delta in deltas:
        if max_delta is None or abs(delta.net_worth_delta) > abs(max_delta.net_worth_delta):
            max_delta = delta
    return max_delta


def find_crossover_year(deltas: Sequence[YearDelta]) -> Optional[int]:
    """Find the first year the net worth delta changes sign.

    Zero deltas neither start nor end a run; the sign is compared against
    the most recent non-zero delta.
    """
    previous_sign = 0
    for delta in deltas:
        if delta.net_worth_delta == 0:
            continue
        sign = 1 if delta.net_worth_delta > 0 else -1
        if previous_sign and sign != previous_sign:
            return delta.year
        previous_sign = sign
    return None


def calculate_cumulative_impact(deltas: Sequence[YearDelta], start_year: int, end_year: int) -> CumulativeImpact:
    """Calculate the impact of the alternate scenario over a year range.

    Net worth is already cumulative, so the last delta in range is used
    as-is. Income and taxes are summed across the range. The average
    yearly benefit is rounded half up to whole cents.

    Args:
        deltas: Year deltas for the comparison
        start_year: First year of the range (inclusive)
        end_year: Last year of the range (inclusive)

    Returns:
        CumulativeImpact, all zeros when no delta falls in the range
    """
    in_range = [d for d in deltas if start_year <= d.year <= end_year]
    if not in_range:
        return CumulativeImpact(0, 0, 0, 0)

    total_net_worth_delta = in_range[-1].net_worth_delta
    return CumulativeImpact(
        total_net_worth_delta=total_net_worth_delta,
        total_income_delta=sum(d.income_delta for d in in_range),
        total_taxes_delta=sum(d.taxes_delta for d in in_range),
        average_yearly_benefit=int((Decimal(total_net_worth_delta) / len(in_range)).quantize(
            Decimal(1), rounding=ROUND_HALF_UP)),
    )


def get_comparison_at_year(comparison: Comparison, year: int) -> YearComparison:
    """Get baseline, alternate and delta records for a specific year."""
    return YearComparison(
        baseline_year=get_trajectory_year(comparison.baseline, year),
        alternate_year=get_trajectory_year(comparison.alternate, year),
        delta=next((d for d in comparison.deltas if d.year == year), None),
    )


def find_break_even_year(deltas: Sequence[YearDelta]) -> Optional[int]:
    """Find the first year the running total of net worth deltas turns positive."""
    cumulative = 0
    for delta in deltas:
        cumulative += delta.net_worth_delta
        if cumulative > 0:
            return delta.year
    return None
