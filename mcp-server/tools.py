"""Scenario Comparison Tools for MCP Server.

This module provides the tool implementations that wrap the comparison
engine and expose baseline/alternate comparisons through MCP. Monetary
values are returned both as integer cents and as formatted strings.
"""

import os
import sys
import logging
from dataclasses import asdict
from typing import Dict, Optional

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from calc.comparator import (
    calculate_cumulative_impact,
    find_break_even_year,
    find_crossover_year,
    find_max_divergence_year,
    get_comparison_at_year,
)
from model.Comparison import Comparison, YearDelta
from model.Trajectory import find_debt_free_year, find_net_worth_milestone_year
from render.formatters import (
    format_currency_delta,
    format_retirement_delta,
    format_savings_rate_delta,
    format_work_hours_delta,
)
from scenario_loader import list_programs, load_program


logger = logging.getLogger(__name__)


def _delta_to_dict(delta: YearDelta) -> dict:
    result = asdict(delta)
    result["formatted"] = {
        "net_worth_delta": format_currency_delta(delta.net_worth_delta),
        "income_delta": format_currency_delta(delta.income_delta),
        "debt_delta": format_currency_delta(delta.debt_delta),
        "assets_delta": format_currency_delta(delta.assets_delta),
        "taxes_delta": format_currency_delta(delta.taxes_delta),
        "savings_rate_delta": format_savings_rate_delta(delta.savings_rate_delta),
    }
    return result


class ScenarioComparisonTools:
    """Tools that wrap a single baseline/alternate comparison for MCP access."""

    def __init__(self, base_path: str, program_name: str):
        """Load the program and compute its comparison.

        Args:
            base_path: Path containing the input-parameters directory
            program_name: Name of the program folder in input-parameters
        """
        self.base_path = base_path
        self.program_name = program_name
        self.comparison: Comparison = load_program(base_path, program_name)

    @property
    def first_year(self) -> Optional[int]:
        return self.comparison.deltas[0].year if self.comparison.deltas else None

    @property
    def last_year(self) -> Optional[int]:
        return self.comparison.deltas[-1].year if self.comparison.deltas else None

    def _resolve_range(self, start_year: Optional[int], end_year: Optional[int]) -> tuple:
        start = start_year if start_year is not None else self.first_year
        end = end_year if end_year is not None else self.last_year
        return start, end

    def get_comparison_summary(self) -> dict:
        """Get the whole-horizon deltas and the key insight."""
        summary = self.comparison.summary
        return {
            "name": self.comparison.name,
            "years_compared": {
                "first_year": self.first_year,
                "last_year": self.last_year,
                "count": len(self.comparison.deltas),
            },
            "changes": [c.description for c in self.comparison.changes],
            "key_insight": summary.key_insight,
            "summary": asdict(summary),
            "formatted": {
                "retirement_date_delta": format_retirement_delta(summary.retirement_date_delta),
                "lifetime_interest_delta": format_currency_delta(summary.lifetime_interest_delta),
                "net_worth_at_retirement_delta": format_currency_delta(summary.net_worth_at_retirement_delta),
                "total_work_hours_delta": format_work_hours_delta(summary.total_work_hours_delta),
                "net_worth_at_end_delta": format_currency_delta(summary.net_worth_at_end_delta),
            },
        }

    def get_key_insight(self) -> dict:
        """Get the headline describing the most significant change."""
        return {
            "name": self.comparison.name,
            "key_insight": self.comparison.summary.key_insight,
        }

    def get_year_comparison(self, year: int) -> dict:
        """Get baseline, alternate and delta records for one year."""
        year_data = get_comparison_at_year(self.comparison, year)
        if year_data.delta is None:
            return {"error": f"Year {year} is not covered by both scenarios"}
        return {
            "year": year,
            "baseline": asdict(year_data.baseline_year),
            "alternate": asdict(year_data.alternate_year),
            "delta": _delta_to_dict(year_data.delta),
        }

    def get_year_deltas(self, start_year: Optional[int] = None, end_year: Optional[int] = None) -> dict:
        """Get year-by-year deltas over a range."""
        start, end = self._resolve_range(start_year, end_year)
        deltas = [d for d in self.comparison.deltas if start <= d.year <= end]
        return {
            "start_year": start,
            "end_year": end,
            "deltas": [_delta_to_dict(d) for d in deltas],
        }

    def get_cumulative_impact(self, start_year: Optional[int] = None, end_year: Optional[int] = None) -> dict:
        """Get the cumulative impact of the alternate scenario over a range."""
        start, end = self._resolve_range(start_year, end_year)
        if start is None:
            return {"error": "No years are covered by both scenarios"}
        impact = calculate_cumulative_impact(self.comparison.deltas, start, end)
        result = asdict(impact)
        result["start_year"] = start
        result["end_year"] = end
        result["formatted"] = {
            "total_net_worth_delta": format_currency_delta(impact.total_net_worth_delta),
            "total_income_delta": format_currency_delta(impact.total_income_delta),
            "total_taxes_delta": format_currency_delta(impact.total_taxes_delta),
            "average_yearly_benefit": format_currency_delta(impact.average_yearly_benefit),
        }
        return result

    def get_divergence_points(self, net_worth_target: Optional[int] = None) -> dict:
        """Get the years where the scenarios diverge most, cross over and break even.

        Also reports the first debt-free year of each scenario and, when a
        target is given, the first year each scenario reaches that net worth.

        Args:
            net_worth_target: Optional net worth milestone in cents
        """
        deltas = self.comparison.deltas
        baseline = self.comparison.baseline
        alternate = self.comparison.alternate
        max_divergence = find_max_divergence_year(deltas)
        result = {
            "max_divergence": {
                "year": max_divergence.year,
                "net_worth_delta": max_divergence.net_worth_delta,
                "formatted": format_currency_delta(max_divergence.net_worth_delta),
            } if max_divergence is not None else None,
            "crossover_year": find_crossover_year(deltas),
            "break_even_year": find_break_even_year(deltas),
            "debt_free_year": {
                "baseline": find_debt_free_year(baseline),
                "alternate": find_debt_free_year(alternate),
            },
        }
        if net_worth_target is not None:
            result["net_worth_milestone"] = {
                "target": net_worth_target,
                "baseline_year": find_net_worth_milestone_year(baseline, net_worth_target),
                "alternate_year": find_net_worth_milestone_year(alternate, net_worth_target),
            }
        return result


class MultiProgramTools:
    """Manager for multiple comparison programs.

    Discovers all available programs and caches their comparisons,
    allowing queries to specify which program to use.
    """

    def __init__(self, base_path: str, default_program: Optional[str] = None):
        """Initialize and discover all available programs.

        Args:
            base_path: Path containing the input-parameters directory
            default_program: Default program to use when none specified
        """
        self.base_path = base_path
        self.programs: Dict[str, ScenarioComparisonTools] = {}
        self.default_program = default_program
        self._discover_programs()

    def _discover_programs(self):
        """Discover and load all available programs."""
        for name in list_programs(self.base_path):
            try:
                self.programs[name] = ScenarioComparisonTools(self.base_path, name)
            except (OSError, ValueError) as e:
                # Skip programs that fail to load so the rest stay available
                logger.warning("Failed to load program '%s': %s", name, e)

        if self.default_program is None and self.programs:
            self.default_program = sorted(self.programs.keys())[0]

    def _get_program(self, program: Optional[str] = None, require_explicit: bool = False) -> ScenarioComparisonTools:
        """Get the specified program or default.

        Args:
            program: Program name to use, or None for default
            require_explicit: If True, raise error when program not specified and multiple exist
        """
        if program is None and len(self.programs) > 1 and require_explicit:
            available = sorted(self.programs.keys())
            raise ValueError(
                f"Multiple programs available: {available}. Please specify which program to query."
            )

        program_name = program or self.default_program

        if program_name not in self.programs:
            available = sorted(self.programs.keys())
            raise ValueError(
                f"Program '{program_name}' not found. Available programs: {available}"
            )

        return self.programs[program_name]

    def _with_program(self, result: dict, program: Optional[str]) -> dict:
        result["program"] = program or self.default_program
        return result

    def list_programs(self) -> dict:
        """List all available programs."""
        programs_info = {}
        for name, tools in self.programs.items():
            programs_info[name] = {
                "name": tools.comparison.name,
                "first_year": tools.first_year,
                "last_year": tools.last_year,
                "key_insight": tools.comparison.summary.key_insight,
            }

        return {
            "available_programs": sorted(self.programs.keys()),
            "default_program": self.default_program,
            "programs_info": programs_info
        }

    def reload_programs(self) -> dict:
        """Reload all programs from disk, refreshing the cache."""
        old_programs = set(self.programs.keys())

        self.programs.clear()
        self.default_program = None
        self._discover_programs()

        new_programs = set(self.programs.keys())

        return {
            "status": "success",
            "message": f"Reloaded {len(self.programs)} programs",
            "programs_loaded": sorted(new_programs),
            "default_program": self.default_program,
            "changes": {
                "added": sorted(new_programs - old_programs),
                "removed": sorted(old_programs - new_programs),
                "reloaded": sorted(old_programs & new_programs)
            }
        }

    def get_comparison_summary(self, program: Optional[str] = None) -> dict:
        result = self._get_program(program, require_explicit=True).get_comparison_summary()
        return self._with_program(result, program)

    def get_key_insight(self, program: Optional[str] = None) -> dict:
        result = self._get_program(program, require_explicit=True).get_key_insight()
        return self._with_program(result, program)

    def get_year_comparison(self, year: int, program: Optional[str] = None) -> dict:
        result = self._get_program(program, require_explicit=True).get_year_comparison(year)
        return self._with_program(result, program)

    def get_year_deltas(self, start_year: Optional[int] = None, end_year: Optional[int] = None,
                        program: Optional[str] = None) -> dict:
        result = self._get_program(program, require_explicit=True).get_year_deltas(start_year, end_year)
        return self._with_program(result, program)

    def get_cumulative_impact(self, start_year: Optional[int] = None, end_year: Optional[int] = None,
                              program: Optional[str] = None) -> dict:
        result = self._get_program(program, require_explicit=True).get_cumulative_impact(start_year, end_year)
        return self._with_program(result, program)

    def get_divergence_points(self, program: Optional[str] = None,
                              net_worth_target: Optional[int] = None) -> dict:
        result = self._get_program(program, require_explicit=True).get_divergence_points(net_worth_target)
        return self._with_program(result, program)
