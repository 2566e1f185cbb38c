"""Tests for loading comparison programs from disk."""

import os
import sys
import json
import logging

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

from scenario_loader import (
    list_programs,
    load_program,
    load_trajectory,
    program_exists,
    trajectory_from_dict,
)


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


def year_record(year, net_worth, **extra):
    record = {
        "year": year, "netWorth": net_worth, "grossIncome": 8000000,
        "totalDebt": 1000000, "totalAssets": net_worth + 1000000,
        "taxFederal": 1200000, "taxState": 300000, "taxFica": 612000,
        "savingsRate": 0.15,
    }
    record.update(extra)
    return record


def write_program(base_path, name, baseline, alternate, meta=None):
    program_dir = os.path.join(base_path, 'input-parameters', name)
    os.makedirs(program_dir)
    with open(os.path.join(program_dir, 'baseline.json'), 'w') as f:
        json.dump(baseline, f)
    with open(os.path.join(program_dir, 'alternate.json'), 'w') as f:
        json.dump(alternate, f)
    if meta is not None:
        with open(os.path.join(program_dir, 'comparison.json'), 'w') as f:
            json.dump(meta, f)


def test_trajectory_from_dict_derives_summary():
    trajectory = trajectory_from_dict({
        "profileId": "p1",
        "retirementYear": 2027,
        "years": [
            year_record(2027, 6000000, totalWorkHours=1000, totalInterestPaid=5000),
            year_record(2026, 5000000, totalWorkHours=2080, totalInterestPaid=7000),
        ],
    })

    assert trajectory.profile_id == "p1"
    assert [yd.year for yd in trajectory.years] == [2026, 2027]
    assert trajectory.summary.retirement_year == 2027
    assert trajectory.summary.total_lifetime_work_hours == 3080
    assert trajectory.summary.total_lifetime_interest == 12000
    assert trajectory.summary.net_worth_at_end == 6000000
    assert trajectory.years[0].savings_rate == pytest.approx(0.15)


def test_trajectory_from_dict_uses_explicit_summary():
    trajectory = trajectory_from_dict({
        "years": [year_record(2026, 5000000)],
        "summary": {"retirementYear": 2050, "netWorthAtEnd": 99, "totalLifetimeWorkHours": 40000},
    })

    assert trajectory.summary.retirement_year == 2050
    assert trajectory.summary.net_worth_at_end == 99
    assert trajectory.summary.total_lifetime_work_hours == 40000


def test_trajectory_from_dict_missing_years():
    with pytest.raises(ValueError, match="years"):
        trajectory_from_dict({"profileId": "p1"}, source="broken.json")


def test_trajectory_from_dict_missing_year_field():
    record = year_record(2026, 5000000)
    del record["taxFica"]

    with pytest.raises(ValueError, match="taxFica"):
        trajectory_from_dict({"years": [record]})


def test_trajectory_from_dict_rejects_fractional_cents():
    with pytest.raises(ValueError, match="netWorth"):
        trajectory_from_dict({"years": [year_record(2026, 100.7)]}, source="bad.json")


def test_trajectory_from_dict_rejects_fractional_summary_cents():
    with pytest.raises(ValueError, match="netWorthAtEnd"):
        trajectory_from_dict({
            "years": [year_record(2026, 5000000)],
            "summary": {"netWorthAtEnd": 12.5},
        })


def test_trajectory_from_dict_accepts_whole_floats():
    trajectory = trajectory_from_dict({
        "years": [year_record(2026, 5000000.0)],
        "summary": {"retirementYear": 2050.0, "retirementAge": 65.0},
    })

    assert trajectory.years[0].net_worth == 5000000
    assert isinstance(trajectory.years[0].net_worth, int)
    assert trajectory.summary.retirement_year == 2050
    assert isinstance(trajectory.summary.retirement_year, int)
    assert isinstance(trajectory.summary.retirement_age, int)


def test_load_program_with_float_retirement_years(tmp_path):
    write_program(
        str(tmp_path), 'floaty',
        {"years": [year_record(2026, 5000000)], "retirementYear": 2050.0},
        {"years": [year_record(2026, 5000000)], "retirementYear": 2049.0},
    )

    comparison = load_program(str(tmp_path), 'floaty')

    assert comparison.summary.retirement_date_delta == -12
    assert isinstance(comparison.summary.retirement_date_delta, int)
    assert comparison.summary.key_insight == "Retire 1.0 years earlier"


def test_load_trajectory_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_trajectory(str(tmp_path / 'missing.json'))


def test_load_program_with_metadata(tmp_path):
    write_program(
        str(tmp_path), 'raise',
        {"years": [year_record(2026, 5000000)], "retirementYear": 2050},
        {"years": [year_record(2026, 5500000)], "retirementYear": 2048},
        {"name": "Ask for a Raise", "changes": [
            {"field": "income[0].amount", "originalValue": 80000, "newValue": 90000,
             "description": "Increase salary to $90K"}
        ]},
    )

    comparison = load_program(str(tmp_path), 'raise')

    assert comparison.name == "Ask for a Raise"
    assert comparison.changes[0].new_value == 90000
    assert comparison.deltas[0].net_worth_delta == 500000
    assert comparison.summary.retirement_date_delta == -24
    assert comparison.summary.key_insight == "Retire 2.0 years earlier"


def test_load_program_without_metadata_uses_program_name(tmp_path):
    write_program(
        str(tmp_path), 'plain',
        {"years": [year_record(2026, 5000000)]},
        {"years": [year_record(2026, 5000000)]},
    )

    comparison = load_program(str(tmp_path), 'plain')

    assert comparison.name == 'plain'
    assert comparison.changes == []


def test_load_program_logs_year_span(tmp_path, caplog):
    write_program(
        str(tmp_path), 'span',
        {"years": [year_record(2027, 5000000), year_record(2026, 4000000)]},
        {"years": [year_record(2026, 4000000)]},
    )

    with caplog.at_level(logging.INFO, logger='scenario_loader'):
        load_program(str(tmp_path), 'span')

    assert "baseline 2026-2027, alternate 2026-2026" in caplog.text


def test_list_programs(tmp_path):
    write_program(str(tmp_path), 'b', {"years": []}, {"years": []})
    write_program(str(tmp_path), 'a', {"years": []}, {"years": []})
    os.makedirs(os.path.join(str(tmp_path), 'input-parameters', 'incomplete'))

    assert list_programs(str(tmp_path)) == ['a', 'b']
    assert program_exists(str(tmp_path), 'a')
    assert not program_exists(str(tmp_path), 'incomplete')


def test_list_programs_without_input_parameters(tmp_path):
    assert list_programs(str(tmp_path)) == []


def test_quickexample_program():
    comparison = load_program(PROJECT_ROOT, 'quickexample')

    assert comparison.name == 'Extra Debt Payment'
    assert len(comparison.deltas) == 6
    assert comparison.summary.retirement_date_delta == -12
    assert comparison.summary.lifetime_interest_delta == -575000
    assert comparison.summary.net_worth_at_end_delta == 600000
    assert comparison.summary.key_insight == 'Retire 1.0 years earlier'
