"""Tests for the comparison data model and year delta calculation."""

import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../../src')))

from model.common import dollars_to_cents
from model.Comparison import (
    ComparisonSummary,
    YearDelta,
    calculate_year_delta,
    create_empty_comparison_summary,
    create_empty_year_delta,
)
from model.Trajectory import TrajectoryYear


NUMERIC_DELTA_FIELDS = (
    'net_worth_delta', 'income_delta', 'debt_delta',
    'assets_delta', 'taxes_delta', 'savings_rate_delta',
)


def make_baseline():
    return TrajectoryYear(
        year=2024,
        net_worth=dollars_to_cents(100000),
        gross_income=dollars_to_cents(80000),
        total_debt=dollars_to_cents(50000),
        total_assets=dollars_to_cents(150000),
        tax_federal=dollars_to_cents(12000),
        tax_state=dollars_to_cents(3000),
        tax_fica=dollars_to_cents(6000),
        savings_rate=0.15,
    )


def make_alternate():
    """Alternate record without a year, as supplied by callers that align years themselves."""
    return SimpleNamespace(
        net_worth=dollars_to_cents(120000),
        gross_income=dollars_to_cents(90000),
        total_debt=dollars_to_cents(40000),
        total_assets=dollars_to_cents(160000),
        tax_federal=dollars_to_cents(14000),
        tax_state=dollars_to_cents(3500),
        tax_fica=dollars_to_cents(6885),
        savings_rate=0.20,
    )


def test_empty_comparison_summary_is_all_zero():
    summary = create_empty_comparison_summary()

    assert summary.retirement_date_delta == 0
    assert summary.lifetime_interest_delta == 0
    assert summary.net_worth_at_retirement_delta == 0
    assert summary.total_work_hours_delta == 0
    assert summary.net_worth_at_end_delta == 0
    assert summary.key_insight == ''


def test_empty_comparison_summary_is_mutable():
    """Callers fill in an empty summary field by field."""
    summary = create_empty_comparison_summary()
    summary.retirement_date_delta = -24
    summary.net_worth_at_end_delta = dollars_to_cents(500000)
    summary.total_work_hours_delta = -4160

    assert summary.retirement_date_delta == -24
    assert summary.net_worth_at_end_delta == 50000000
    assert summary.total_work_hours_delta == -4160


def test_empty_comparison_summaries_are_independent():
    first = create_empty_comparison_summary()
    second = create_empty_comparison_summary()
    first.key_insight = 'changed'

    assert second.key_insight == ''
    assert first is not second


@pytest.mark.parametrize('year', [1999, 2024, 2075])
def test_empty_year_delta_keeps_year(year):
    delta = create_empty_year_delta(year)

    assert delta.year == year
    for name in NUMERIC_DELTA_FIELDS:
        assert getattr(delta, name) == 0


def test_year_delta_is_immutable():
    delta = create_empty_year_delta(2024)
    with pytest.raises(AttributeError):
        delta.net_worth_delta = 1


def test_calculate_year_delta():
    delta = calculate_year_delta(make_baseline(), make_alternate())

    assert delta.year == 2024
    assert delta.net_worth_delta == dollars_to_cents(20000)
    assert delta.income_delta == dollars_to_cents(10000)
    assert delta.debt_delta == dollars_to_cents(-10000)
    assert delta.assets_delta == dollars_to_cents(10000)
    assert delta.savings_rate_delta == pytest.approx(0.05)


def test_calculate_year_delta_taxes_are_total_vs_total():
    baseline = make_baseline()
    alternate = make_alternate()
    delta = calculate_year_delta(baseline, alternate)

    # (14000 + 3500 + 6885) - (12000 + 3000 + 6000) = 3385
    assert delta.taxes_delta == dollars_to_cents(3385)
    assert delta.taxes_delta == (
        (alternate.tax_federal + alternate.tax_state + alternate.tax_fica)
        - (baseline.tax_federal + baseline.tax_state + baseline.tax_fica)
    )


def test_calculate_year_delta_is_antisymmetric():
    baseline = make_baseline()
    alternate = TrajectoryYear(year=2024, **vars(make_alternate()))

    forward = calculate_year_delta(baseline, alternate)
    backward = calculate_year_delta(alternate, baseline)

    for name in NUMERIC_DELTA_FIELDS:
        assert getattr(backward, name) == pytest.approx(-getattr(forward, name))


def test_calculate_year_delta_identical_years_is_empty():
    baseline = make_baseline()
    assert calculate_year_delta(baseline, baseline) == create_empty_year_delta(2024)


def test_calculate_year_delta_passes_negative_values_through():
    baseline = TrajectoryYear(year=2030, total_debt=-500, total_assets=-1000)
    alternate = TrajectoryYear(year=2030, total_debt=200, total_assets=-3000)

    delta = calculate_year_delta(baseline, alternate)

    assert delta.debt_delta == 700
    assert delta.assets_delta == -2000


def test_dataclass_types():
    assert isinstance(create_empty_comparison_summary(), ComparisonSummary)
    assert isinstance(create_empty_year_delta(2024), YearDelta)
