"""Renderer classes for displaying scenario comparisons.

This module contains renderer classes that handle the presentation logic
for comparison output. Each renderer takes a Comparison and prints the
part of it that it is responsible for.
"""

from abc import ABC, abstractmethod
from typing import List

from calc.comparator import (
    calculate_cumulative_impact,
    find_break_even_year,
    find_crossover_year,
    find_max_divergence_year,
)
from model.common import cents_to_dollars
from model.Comparison import Comparison
from model.Trajectory import find_debt_free_year
from model.field_metadata import get_short_name, wrap_header
from render.formatters import (
    format_currency_delta,
    format_retirement_delta,
    format_savings_rate_delta,
    format_work_hours_delta,
)


def format_multiline_headers(columns: List[tuple], year_width: int = 6) -> tuple[List[str], str]:
    """Format column headers with multi-line wrapping support.

    Args:
        columns: List of (header_text, width) tuples for each column
        year_width: Width of the Year column (default 6)

    Returns:
        Tuple of (list of header lines, separator line)
    """
    wrapped_headers = []
    for header, width in columns:
        lines = wrap_header(header, width)
        wrapped_headers.append((lines, width))

    max_lines = max(len(lines) for lines, _ in wrapped_headers) if wrapped_headers else 1

    # Pad all headers to have the same number of lines (pad at top)
    for lines, width in wrapped_headers:
        while len(lines) < max_lines:
            lines.insert(0, "")

    header_lines = []
    for line_idx in range(max_lines):
        if line_idx == max_lines - 1:
            header_line = f"  {'Year':<{year_width}}"
        else:
            header_line = f"  {'':<{year_width}}"

        for lines, width in wrapped_headers:
            header_line += f" {lines[line_idx]:>{width}}"
        header_lines.append(header_line)

    sep_line = f"  {'-' * year_width}"
    for _, width in wrapped_headers:
        sep_line += f" {'-' * width}"

    return header_lines, sep_line


def parse_year_range(year_range: str, comparison: Comparison) -> tuple:
    """Parse a year range string into start and end years.

    Args:
        year_range: String in format 'startYear-endYear', 'startYear-', or '-endYear'
        comparison: Comparison to get default years from

    Returns:
        Tuple of (start_year, end_year)
    """
    if '-' not in year_range:
        year = int(year_range)
        return (year, year)

    parts = year_range.split('-')
    start_year = int(parts[0]) if parts[0] else _first_year(comparison)
    end_year = int(parts[1]) if parts[1] else _last_year(comparison)
    return (start_year, end_year)


def _first_year(comparison: Comparison) -> int:
    return comparison.deltas[0].year if comparison.deltas else 0


def _last_year(comparison: Comparison) -> int:
    return comparison.deltas[-1].year if comparison.deltas else 0


class BaseRenderer(ABC):
    """Abstract base class for all renderers."""

    def __init__(self, start_year: int = None, end_year: int = None):
        """Initialize with optional year range.

        Args:
            start_year: First year to display (defaults to the first compared year)
            end_year: Last year to display (defaults to the last compared year)
        """
        self.start_year = start_year
        self.end_year = end_year

    def year_range(self, comparison: Comparison) -> tuple:
        start = self.start_year if self.start_year is not None else _first_year(comparison)
        end = self.end_year if self.end_year is not None else _last_year(comparison)
        return start, end

    @abstractmethod
    def render(self, comparison: Comparison) -> None:
        """Render the comparison to output.

        Args:
            comparison: The Comparison to display
        """
        pass


class ComparisonSummaryRenderer(BaseRenderer):
    """Renderer for the headline insight and whole-horizon deltas."""

    def render(self, comparison: Comparison) -> None:
        summary = comparison.summary
        start, end = self.year_range(comparison)

        print()
        print("=" * 70)
        print(f"{comparison.name.upper():^70}")
        print("=" * 70)
        print()
        print(f"  {summary.key_insight}")

        if comparison.changes:
            print()
            print("-" * 70)
            print("CHANGES FROM BASELINE")
            print("-" * 70)
            for change in comparison.changes:
                print(f"  - {change.description}")

        print()
        print("-" * 70)
        print("SUMMARY")
        print("-" * 70)
        print(f"  {get_short_name('retirement_date_delta') + ':':<40} {format_retirement_delta(summary.retirement_date_delta):>26}")
        print(f"  {get_short_name('net_worth_at_retirement_delta') + ':':<40} {format_currency_delta(summary.net_worth_at_retirement_delta):>26}")
        print(f"  {get_short_name('net_worth_at_end_delta') + ':':<40} {format_currency_delta(summary.net_worth_at_end_delta):>26}")
        print(f"  {get_short_name('lifetime_interest_delta') + ':':<40} {format_currency_delta(summary.lifetime_interest_delta):>26}")
        print(f"  {get_short_name('total_work_hours_delta') + ':':<40} {format_work_hours_delta(summary.total_work_hours_delta):>26}")

        in_range = [d for d in comparison.deltas if start <= d.year <= end]
        max_divergence = find_max_divergence_year(in_range)
        crossover = find_crossover_year(in_range)
        break_even = find_break_even_year(in_range)
        impact = calculate_cumulative_impact(comparison.deltas, start, end)

        print()
        print("-" * 70)
        print(f"KEY YEARS ({start}-{end})")
        print("-" * 70)
        if max_divergence is not None:
            print(f"  {'Largest Divergence:':<40} {max_divergence.year:>10} {format_currency_delta(max_divergence.net_worth_delta):>15}")
        else:
            print(f"  {'Largest Divergence:':<40} {'None':>10}")
        print(f"  {'Crossover Year:':<40} {crossover if crossover is not None else 'None':>10}")
        print(f"  {'Break-Even Year:':<40} {break_even if break_even is not None else 'None':>10}")
        baseline_debt_free = find_debt_free_year(comparison.baseline)
        alternate_debt_free = find_debt_free_year(comparison.alternate)
        print(f"  {'Debt-Free Year (baseline):':<40} {baseline_debt_free if baseline_debt_free is not None else 'None':>10}")
        print(f"  {'Debt-Free Year (alternate):':<40} {alternate_debt_free if alternate_debt_free is not None else 'None':>10}")

        print()
        print("-" * 70)
        print("CUMULATIVE IMPACT")
        print("-" * 70)
        print(f"  {'Net Worth Change:':<40} ${cents_to_dollars(impact.total_net_worth_delta):>+18,.2f}")
        print(f"  {'Total Income Change:':<40} ${cents_to_dollars(impact.total_income_delta):>+18,.2f}")
        print(f"  {'Total Tax Change:':<40} ${cents_to_dollars(impact.total_taxes_delta):>+18,.2f}")
        print(f"  {'Average Yearly Benefit:':<40} ${cents_to_dollars(impact.average_yearly_benefit):>+18,.2f}")
        print()
        print("=" * 70)
        print()


class YearDeltaRenderer(BaseRenderer):
    """Renderer for the year-by-year delta table."""

    def render(self, comparison: Comparison) -> None:
        print()
        print("=" * 100)
        print(f"{'YEAR-BY-YEAR CHANGES: ' + comparison.name.upper():^100}")
        print("=" * 100)
        print()

        # Define columns with their headers and widths (using field metadata)
        columns = [
            (get_short_name("net_worth_delta"), 14),
            (get_short_name("income_delta"), 14),
            (get_short_name("debt_delta"), 14),
            (get_short_name("assets_delta"), 14),
            (get_short_name("taxes_delta"), 14),
            (get_short_name("savings_rate_delta"), 18),
        ]

        header_lines, sep_line = format_multiline_headers(columns)
        for line in header_lines:
            print(line)
        print(sep_line)

        start, end = self.year_range(comparison)
        for d in comparison.deltas:
            if d.year < start or d.year > end:
                continue
            print(f"  {d.year:<6} {format_currency_delta(d.net_worth_delta):>14} {format_currency_delta(d.income_delta):>14} "
                  f"{format_currency_delta(d.debt_delta):>14} {format_currency_delta(d.assets_delta):>14} "
                  f"{format_currency_delta(d.taxes_delta):>14} {format_savings_rate_delta(d.savings_rate_delta):>18}")

        print(sep_line)
        print()


# Registry mapping mode names to renderer classes
RENDERER_REGISTRY = {
    'Summary': ComparisonSummaryRenderer,
    'YearDeltas': YearDeltaRenderer,
}
