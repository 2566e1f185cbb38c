"""Load comparison programs from the input-parameters directory.

A program is a folder ``input-parameters/<program>/`` holding two trajectory
files, ``baseline.json`` and ``alternate.json``, and an optional
``comparison.json`` with a display name and the list of changes that turn
the baseline into the alternate. Trajectory files use camelCase keys and
store every monetary value as integer cents.
"""

import os
import json
import logging
from typing import Optional

from model.Comparison import Change, Comparison
from model.Trajectory import Trajectory, TrajectorySummary, TrajectoryYear, summarize_years
from calc.comparator import compare_trajectories


logger = logging.getLogger(__name__)

BASELINE_FILE = 'baseline.json'
ALTERNATE_FILE = 'alternate.json'
COMPARISON_FILE = 'comparison.json'

# Year record keys that must be present in every trajectory file
REQUIRED_YEAR_KEYS = (
    'year', 'netWorth', 'grossIncome', 'totalDebt', 'totalAssets',
    'taxFederal', 'taxState', 'taxFica', 'savingsRate',
)


def _require(d: dict, key: str, source: str):
    if key not in d:
        raise ValueError(f"Missing required key '{key}' in {source}")
    return d[key]


def _whole(d: dict, key: str, source: str, default: Optional[int] = 0) -> Optional[int]:
    """Read an integer field (cents, hours, years), rejecting fractional values."""
    value = d.get(key, default)
    if value is None:
        return None
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Non-integer value for '{key}' in {source}: {value}")
    return int(value)


def year_from_dict(d: dict, source: str = 'trajectory') -> TrajectoryYear:
    """Build a TrajectoryYear from a camelCase year record."""
    for key in REQUIRED_YEAR_KEYS:
        _require(d, key, source)
    return TrajectoryYear(
        year=_whole(d, 'year', source),
        net_worth=_whole(d, 'netWorth', source),
        gross_income=_whole(d, 'grossIncome', source),
        total_debt=_whole(d, 'totalDebt', source),
        total_assets=_whole(d, 'totalAssets', source),
        tax_federal=_whole(d, 'taxFederal', source),
        tax_state=_whole(d, 'taxState', source),
        tax_fica=_whole(d, 'taxFica', source),
        savings_rate=float(d['savingsRate']),
        age=_whole(d, 'age', source),
        total_work_hours=_whole(d, 'totalWorkHours', source),
        total_interest_paid=_whole(d, 'totalInterestPaid', source),
    )


def summary_from_dict(d: dict, source: str = 'summary') -> TrajectorySummary:
    """Build a TrajectorySummary from a camelCase summary block."""
    return TrajectorySummary(
        total_years=_whole(d, 'totalYears', source),
        retirement_year=_whole(d, 'retirementYear', source, None),
        retirement_age=_whole(d, 'retirementAge', source, None),
        total_lifetime_income=_whole(d, 'totalLifetimeIncome', source),
        total_lifetime_taxes=_whole(d, 'totalLifetimeTaxes', source),
        total_lifetime_interest=_whole(d, 'totalLifetimeInterest', source),
        net_worth_at_retirement=_whole(d, 'netWorthAtRetirement', source),
        net_worth_at_end=_whole(d, 'netWorthAtEnd', source),
        total_lifetime_work_hours=_whole(d, 'totalLifetimeWorkHours', source),
    )


def trajectory_from_dict(d: dict, source: str = 'trajectory') -> Trajectory:
    """Build a Trajectory from its JSON representation.

    When the file carries no ``summary`` block the summary is derived from
    the year records, using the optional top-level ``retirementYear``.

    Args:
        d: Parsed trajectory JSON
        source: Name used in error messages

    Returns:
        The decoded Trajectory

    Raises:
        ValueError: If a required key is missing or a whole-number field
            holds a fractional value
    """
    years = [year_from_dict(y, source) for y in _require(d, 'years', source)]
    years.sort(key=lambda yd: yd.year)

    if 'summary' in d:
        summary = summary_from_dict(d['summary'], source)
    else:
        summary = summarize_years(years, _whole(d, 'retirementYear', source, None))

    return Trajectory(profile_id=d.get('profileId', ''), years=years, summary=summary)


def load_trajectory(path: str) -> Trajectory:
    """Load a trajectory JSON file."""
    with open(path, 'r') as f:
        data = json.load(f)
    return trajectory_from_dict(data, source=os.path.basename(path))


def get_program_dir(base_path: str, program_name: str) -> str:
    return os.path.join(base_path, 'input-parameters', program_name)


def program_exists(base_path: str, program_name: str) -> bool:
    """Check that a program folder has both trajectory files."""
    program_dir = get_program_dir(base_path, program_name)
    return (os.path.isfile(os.path.join(program_dir, BASELINE_FILE))
            and os.path.isfile(os.path.join(program_dir, ALTERNATE_FILE)))


def list_programs(base_path: str) -> list[str]:
    """List all comparison programs in the input-parameters directory.

    Args:
        base_path: Base path containing the input-parameters directory

    Returns:
        Sorted list of program names
    """
    input_params_path = os.path.join(base_path, 'input-parameters')
    if not os.path.exists(input_params_path):
        return []

    programs = []
    for name in os.listdir(input_params_path):
        if os.path.isdir(os.path.join(input_params_path, name)) and program_exists(base_path, name):
            programs.append(name)

    return sorted(programs)


def load_program(base_path: str, program_name: str, name: Optional[str] = None) -> Comparison:
    """Load a program's trajectories and compare them.

    Args:
        base_path: Base path containing the input-parameters directory
        program_name: Name of the program folder
        name: Display name for the comparison; overrides comparison.json

    Returns:
        The computed Comparison
    """
    program_dir = get_program_dir(base_path, program_name)
    baseline = load_trajectory(os.path.join(program_dir, BASELINE_FILE))
    alternate = load_trajectory(os.path.join(program_dir, ALTERNATE_FILE))

    meta = {}
    meta_path = os.path.join(program_dir, COMPARISON_FILE)
    if os.path.exists(meta_path):
        with open(meta_path, 'r') as f:
            meta = json.load(f)

    changes = [
        Change(
            field=c.get('field', ''),
            original_value=c.get('originalValue'),
            new_value=c.get('newValue'),
            description=c.get('description', ''),
        )
        for c in meta.get('changes', [])
    ]

    comparison_name = name or meta.get('name') or program_name
    logger.info("Loaded program '%s': baseline %s-%s, alternate %s-%s",
                program_name, baseline.first_year(), baseline.last_year(),
                alternate.first_year(), alternate.last_year())
    return compare_trajectories(baseline, alternate, changes, comparison_name)
