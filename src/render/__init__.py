"""Render module for comparison output display.

Console renderers live in ``render.renderers``; they are not re-exported
here because the comparator itself depends on the formatters.
"""

from render.formatters import (
    format_retirement_delta,
    format_currency_delta,
    format_work_hours_delta,
    format_savings_rate_delta,
    get_most_significant_change,
    MINIMAL_DIFFERENCE,
)

__all__ = [
    'format_retirement_delta',
    'format_currency_delta',
    'format_work_hours_delta',
    'format_savings_rate_delta',
    'get_most_significant_change',
    'MINIMAL_DIFFERENCE',
]
