"""
Validation module for run_one_year package.

Capacity resolution and the student/capacity checks. Problems are appended to
the caller's error list; nothing here raises.
"""

import logging
from typing import Any, List, Optional

from feasibility_model.state.schema import YEAR_1
from feasibility_model.utils.numeric import as_dict, is_finite_number, safe_div, safe_num

logger = logging.getLogger(__name__)


def resolve_school_capacity(year_input: Any) -> float:
    """``school_capacity`` when positive, otherwise ``capacity.years.y1``."""
    data = as_dict(year_input)
    direct = safe_num(data.get("school_capacity"))
    if direct > 0:
        return direct
    return safe_num(as_dict(as_dict(data.get("capacity")).get("years")).get(YEAR_1))


def validate_capacity(
    school_capacity: float, total_students: float, errors: List[str]
) -> Optional[float]:
    """
    Check capacity and head count, returning the utilization rate.

    Returns:
        total_students / school_capacity, or None when capacity is zero.
    """
    if not is_finite_number(school_capacity) or school_capacity <= 0:
        errors.append("school_capacity must be a positive number.")
    if not is_finite_number(total_students) or total_students < 0:
        errors.append("total_students computed invalid.")
    if school_capacity > 0 and total_students > school_capacity:
        errors.append("total_students exceeds school_capacity.")
        logger.info(f"Students {total_students} exceed capacity {school_capacity}")
    return safe_div(total_students, school_capacity)
