# feasibility_model/utils/numeric.py
"""
Tolerant numeric and shape helpers.

Scenario documents arrive from editors and older exports, so any leaf may be
missing, a numeric string, None or garbage. These helpers coerce such values
to something the engines can accumulate without raising.
"""

import math
from typing import Any, Dict, List, Optional

import numpy as np


def is_finite_number(value: Any) -> bool:
    """True for real (non-bool) numbers that are neither NaN nor infinite."""
    if isinstance(value, bool) or not isinstance(value, (int, float, np.number)):
        return False
    return bool(np.isfinite(value))


def to_number(value: Any) -> Optional[float]:
    """Coerce ``value`` to float, returning None when it is not a finite number."""
    if value is None:
        return None
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def safe_num(value: Any) -> float:
    """Coerce ``value`` to a finite float, falling back to 0.0."""
    number = to_number(value)
    return 0.0 if number is None else number


def clamp(value: float, lower: float, upper: float) -> float:
    return min(upper, max(lower, value))


def safe_div(numerator: Any, denominator: Any) -> Optional[float]:
    """Divide, returning None for non-finite operands or a zero denominator."""
    if not is_finite_number(numerator) or not is_finite_number(denominator) or denominator == 0:
        return None
    return float(numerator) / float(denominator)


def as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []
