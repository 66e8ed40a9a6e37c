# feasibility_model/projections/runner.py
"""
Core three-year feasibility runner.

    result = run_feasibility(scenario, norm_config)
    result.years["y2"].totals.net_result
    result.multi_year_valid
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from feasibility_model.config.accessors import resolve_norm_year_config
from feasibility_model.config.models import EngineConfig
from feasibility_model.engines.run_one_year import YearResult, run_one_year
from feasibility_model.engines.salaries import compute_salary_lines_by_year
from feasibility_model.projections.inflation import InflationFactors, get_inflation_factors
from feasibility_model.projections.year_deriver import derive_input_for_year
from feasibility_model.state.schema import YEAR_KEYS
from feasibility_model.utils.numeric import as_dict

logger = logging.getLogger(__name__)
projection_logger = logging.getLogger("feasibility_model.projection")


@dataclass
class FeasibilityResult:
    """Three projection years plus the inflation assumptions they were built on."""

    years: Dict[str, YearResult]
    inflation: InflationFactors
    basics: Dict[str, Any] = field(default_factory=dict)

    @property
    def multi_year_valid(self) -> bool:
        return all(self.years[year].is_valid for year in YEAR_KEYS)


def run_feasibility(
    scenario: Any,
    norm_config: Any = None,
    config: Optional[EngineConfig] = None,
) -> FeasibilityResult:
    """
    Run the three-year feasibility projection.

    Args:
        scenario: Base-year scenario mapping (never mutated).
        norm_config: Norm settings, flat or with a per-year ``years`` mapping.
        config: Engine defaults; a fresh EngineConfig is built when omitted.

    Returns:
        FeasibilityResult holding one unrounded YearResult per year.
    """
    config = config or EngineConfig()
    base = as_dict(scenario)

    inflation = get_inflation_factors(base, config)
    factors = inflation.factors
    salary_by_year = compute_salary_lines_by_year(base.get("hr"))

    years: Dict[str, YearResult] = {}
    for year_key in YEAR_KEYS:
        year_input = derive_input_for_year(base, year_key, factors, salary_by_year, config)
        year_norm = resolve_norm_year_config(norm_config, year_key, config)
        years[year_key] = run_one_year(year_input, year_norm, config, year_key=year_key)

    result = FeasibilityResult(years=years, inflation=inflation, basics=dict(as_dict(base.get("basics"))))
    projection_logger.info(
        "Feasibility projection complete: "
        + ", ".join(f"{y}={'valid' if years[y].is_valid else 'invalid'}" for y in YEAR_KEYS)
        + f"; multi_year_valid={result.multi_year_valid}"
    )
    return result
