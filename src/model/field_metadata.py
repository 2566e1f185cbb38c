"""Field metadata for comparison fields.

This module provides descriptions and short names for YearDelta and
ComparisonSummary fields. Short names are used as column headers in
delta tables and as labels in summary output.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass
class FieldInfo:
    """Metadata for a single field."""
    short_name: str  # Column header (unique, concise)
    description: str  # Full description of the field


# Field metadata dictionary mapping field names to their info
FIELD_METADATA: Dict[str, FieldInfo] = {
    # YearDelta
    "year": FieldInfo("Year", "Calendar year"),
    "net_worth_delta": FieldInfo("Net Worth Change", "Alternate minus baseline net worth at end of year"),
    "income_delta": FieldInfo("Gross Income Change", "Alternate minus baseline gross income"),
    "debt_delta": FieldInfo("Debt Change", "Alternate minus baseline total debt (negative = less debt)"),
    "assets_delta": FieldInfo("Assets Change", "Alternate minus baseline total assets"),
    "taxes_delta": FieldInfo("Total Tax Change", "Alternate minus baseline federal, state and FICA taxes combined"),
    "savings_rate_delta": FieldInfo("Savings Rate Change", "Alternate minus baseline savings rate, in percentage points"),

    # ComparisonSummary
    "retirement_date_delta": FieldInfo("Retirement Date", "Change in retirement date in months (negative = earlier)"),
    "lifetime_interest_delta": FieldInfo("Lifetime Interest", "Change in total interest paid on debts"),
    "net_worth_at_retirement_delta": FieldInfo("Net Worth at Retirement", "Change in net worth in the retirement year"),
    "total_work_hours_delta": FieldInfo("Work Hours", "Change in total lifetime hours worked"),
    "net_worth_at_end_delta": FieldInfo("Net Worth at End", "Change in net worth at end of projection"),
    "key_insight": FieldInfo("Key Insight", "Headline describing the most significant change"),
}


def get_short_name(field_name: str) -> str:
    """Get the short name for a field, or the field name if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.short_name if info else field_name


def get_description(field_name: str) -> str:
    """Get the description for a field, or empty string if not found."""
    info = FIELD_METADATA.get(field_name)
    return info.description if info else ""


def get_field_info(field_name: str) -> FieldInfo | None:
    """Get the full FieldInfo for a field, or None if not found."""
    return FIELD_METADATA.get(field_name)


def wrap_header(text: str, max_width: int) -> list[str]:
    """Wrap a header text into multiple lines to fit within max_width.

    Words are split on spaces and distributed across lines to minimize
    the total number of lines while staying within max_width.

    Args:
        text: The header text to wrap
        max_width: Maximum width per line

    Returns:
        List of strings, each representing a line
    """
    if len(text) <= max_width:
        return [text]

    words = text.split()
    lines = []
    current_line = ""

    for word in words:
        if not current_line:
            current_line = word
        elif len(current_line) + 1 + len(word) <= max_width:
            current_line += " " + word
        else:
            lines.append(current_line)
            current_line = word

    if current_line:
        lines.append(current_line)

    return lines
