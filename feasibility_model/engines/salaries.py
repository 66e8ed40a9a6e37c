# feasibility_model/engines/salaries.py
"""
Map HR headcount x unit-cost grids onto the five salary expense lines.
"""

import logging
from typing import Any, Dict

from feasibility_model.state.schema import HR_LEVELS, HR_ROLES, SALARY_LINE_ROLES, YEAR_KEYS
from feasibility_model.utils.numeric import as_dict, safe_num

logger = logging.getLogger(__name__)


def compute_role_annual_costs(year_hr: Any) -> Dict[str, float]:
    """Annual cost per role: unit cost x headcount summed over all cohort levels."""
    hr = as_dict(year_hr)
    unit_costs = as_dict(hr.get("unit_costs"))
    headcounts = as_dict(hr.get("headcounts_by_level"))

    costs: Dict[str, float] = {}
    for role in HR_ROLES:
        headcount = sum(safe_num(as_dict(headcounts.get(level)).get(role)) for level in HR_LEVELS)
        costs[role] = safe_num(unit_costs.get(role)) * headcount
    return costs


def compute_salary_lines_for_year(year_hr: Any) -> Dict[str, float]:
    """Bucket the per-role annual costs into the salary expense lines."""
    role_costs = compute_role_annual_costs(year_hr)
    return {
        line: sum(role_costs[role] for role in roles)
        for line, roles in SALARY_LINE_ROLES.items()
    }


def compute_salary_lines_by_year(hr: Any) -> Dict[str, Dict[str, float]]:
    years = as_dict(as_dict(hr).get("years"))
    by_year = {year: compute_salary_lines_for_year(years.get(year)) for year in YEAR_KEYS}
    for year, lines in by_year.items():
        logger.debug(f"[HR {year}] salary lines: {lines}")
    return by_year
