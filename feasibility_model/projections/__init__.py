"""
Projections package: derives years 2 and 3 from the base scenario, runs all
three years and shapes the results for callers.
"""

from .reporting import calculate_school_feasibility, to_legacy_payload
from .runner import FeasibilityResult, run_feasibility

__all__ = [
    "calculate_school_feasibility",
    "to_legacy_payload",
    "FeasibilityResult",
    "run_feasibility",
]
