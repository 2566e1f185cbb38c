"""Human-readable formatting of comparison deltas.

Formatting is fixed to US English with dollar amounts. Each formatter picks
a unit from the absolute size of the delta and describes the direction in
words (earlier/later, fewer/more) or with a leading sign.
"""

from decimal import Decimal, ROUND_HALF_UP

from model.common import Cents
from model.Comparison import ComparisonSummary


MONTHS_PER_YEAR = 12
HOURS_PER_WEEK = 40
HOURS_PER_YEAR = 2080  # 52 weeks at 40 hours

# Scale factors that put each metric on the same footing as one month of
# retirement timing when ranking significance.
CENTS_PER_SIGNIFICANCE_POINT = 100000  # $1,000 of net worth
HOURS_PER_SIGNIFICANCE_POINT = 100

MINIMAL_DIFFERENCE = "Minimal difference between scenarios"


def _fixed(value: float, places: int) -> str:
    """Format a number to a fixed number of decimals, rounding half up."""
    quantum = Decimal(1).scaleb(-places)
    return str(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_retirement_delta(months_delta: int) -> str:
    """Format a retirement date change given in months."""
    if months_delta == 0:
        return "Same retirement date"

    direction = "earlier" if months_delta < 0 else "later"
    abs_months = abs(months_delta)

    if abs_months < MONTHS_PER_YEAR:
        return f"{abs_months} months {direction}"

    return f"{_fixed(abs_months / MONTHS_PER_YEAR, 1)} years {direction}"


def format_currency_delta(cents_delta: Cents) -> str:
    """Format a signed currency change as $, $K or $M.

    Zero is treated as non-negative and formats as ``+$0``.
    """
    dollars = abs(cents_delta) / 100
    sign = "+" if cents_delta >= 0 else "-"

    if dollars >= 1000000:
        return f"{sign}${_fixed(dollars / 1000000, 2)}M"
    if dollars >= 1000:
        return f"{sign}${_fixed(dollars / 1000, 0)}K"
    return f"{sign}${_fixed(dollars, 0)}"


def format_work_hours_delta(hours_delta: int) -> str:
    """Format a change in hours worked as hours, work weeks or work years."""
    if hours_delta == 0:
        return "Same work hours"

    direction = "fewer" if hours_delta < 0 else "more"
    abs_hours = abs(hours_delta)

    if abs_hours < HOURS_PER_WEEK:
        return f"{_fixed(abs_hours, 0)} hours {direction}"

    if abs_hours < HOURS_PER_YEAR:
        weeks = int(abs_hours // HOURS_PER_WEEK)
        return f"{weeks} weeks {direction} of work"

    return f"{_fixed(abs_hours / HOURS_PER_YEAR, 1)} years {direction} of work"


def format_savings_rate_delta(rate_delta: float) -> str:
    """Format a savings rate change as signed percentage points."""
    if rate_delta == 0:
        return "Same savings rate"
    sign = "+" if rate_delta > 0 else "-"
    return f"{sign}{_fixed(abs(rate_delta) * 100, 1)} pts"


def get_most_significant_change(summary: ComparisonSummary) -> str:
    """Pick the single most noteworthy change in a comparison.

    Retirement timing, end-of-projection net worth and total work hours are
    scored on a common scale (one point per month of retirement, per $1,000
    of net worth, per 100 hours of work). The highest score wins; exact ties
    go to the earlier metric in that order.

    Args:
        summary: The comparison summary to describe

    Returns:
        A headline sentence, or a minimal-difference message if nothing changed
    """
    candidates = []

    if summary.retirement_date_delta != 0:
        candidates.append((
            abs(summary.retirement_date_delta),
            f"Retire {format_retirement_delta(summary.retirement_date_delta)}",
        ))

    if summary.net_worth_at_end_delta != 0:
        candidates.append((
            abs(summary.net_worth_at_end_delta) / CENTS_PER_SIGNIFICANCE_POINT,
            f"{format_currency_delta(summary.net_worth_at_end_delta)} net worth at end of projection",
        ))

    if summary.total_work_hours_delta != 0:
        candidates.append((
            abs(summary.total_work_hours_delta) / HOURS_PER_SIGNIFICANCE_POINT,
            format_work_hours_delta(summary.total_work_hours_delta),
        ))

    if not candidates:
        return MINIMAL_DIFFERENCE

    best_score, best_description = candidates[0]
    for score, description in candidates[1:]:
        if score > best_score:
            best_score, best_description = score, description
    return best_description
