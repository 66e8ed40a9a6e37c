# feasibility_model/engines/expenses.py
"""
Engine for totalling a year's expenses.

Three families are totalled independently:
  - operating: flat named amounts (rent, salaries, marketing...)
  - services: per-student services (catering, uniforms...) as student_count x unit_cost
  - dormitory: same shape as services

Negative inputs are clamped to zero and reported as warnings.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from feasibility_model.state.schema import (
    DORMITORY_LINES,
    EXP_DORMITORY,
    EXP_OPERATING,
    EXP_SERVICES,
    GENERAL_ADMINISTRATION,
    LEGACY_EXPENSE_FIELDS,
    OPERATING_LINES,
    SALARY_LINES,
    SERVICE_LINES,
)
from feasibility_model.utils.numeric import as_dict, safe_num

logger = logging.getLogger(__name__)


@dataclass
class ExpenseTotals:
    operating_total: float = 0.0
    services_total: float = 0.0
    dorm_total: float = 0.0
    hr_total: float = 0.0
    warnings: List[str] = field(default_factory=list)

    @property
    def total_expenses(self) -> float:
        return self.operating_total + self.services_total + self.dorm_total


def is_legacy_expense_shape(expenses: Any) -> bool:
    """Pre-itemized scenarios have no operating section but a few yearly totals."""
    exp = as_dict(expenses)
    return exp.get(EXP_OPERATING) is None and any(exp.get(k) is not None for k in LEGACY_EXPENSE_FIELDS)


def resolve_expense_shape(expenses: Any) -> Dict[str, Any]:
    """
    Return the itemized expense shape, collapsing legacy yearly totals into the
    general administration operating line.
    """
    exp = as_dict(expenses)
    if not is_legacy_expense_shape(exp):
        return exp
    approx = sum(safe_num(exp.get(k)) for k in LEGACY_EXPENSE_FIELDS)
    logger.debug(f"Legacy expense shape collapsed into {GENERAL_ADMINISTRATION}={approx:.2f}")
    return {
        EXP_OPERATING: {"items": {GENERAL_ADMINISTRATION: approx}},
        EXP_SERVICES: {"items": {}},
        EXP_DORMITORY: {"items": {}},
    }


def _items(section: Any) -> Dict[str, Any]:
    return as_dict(as_dict(section).get("items"))


def _per_student_total(items: Dict[str, Any], keys, family: str, warnings: List[str]) -> float:
    total = 0.0
    for key in keys:
        row = as_dict(items.get(key))
        student_count = safe_num(row.get("student_count"))
        unit_cost = safe_num(row.get("unit_cost"))
        if student_count < 0:
            warnings.append(f"expenses.{family}.items.{key}.student_count is negative; treated as 0 in totals.")
        if unit_cost < 0:
            warnings.append(f"expenses.{family}.items.{key}.unit_cost is negative; treated as 0 in totals.")
        total += max(0.0, student_count) * max(0.0, unit_cost)
    return total


def calculate_total_expenses(expenses: Any) -> ExpenseTotals:
    """
    Total operating, per-student service and dormitory expenses.

    ``hr_total`` is the sum of the five salary lines inside the operating family
    and feeds the HR cost share KPI.
    """
    exp = resolve_expense_shape(expenses)
    result = ExpenseTotals()

    operating = _items(exp.get(EXP_OPERATING))
    for key in OPERATING_LINES:
        amount = safe_num(operating.get(key))
        if amount < 0:
            result.warnings.append(f"expenses.{EXP_OPERATING}.items.{key} is negative; treated as 0 in totals.")
        result.operating_total += max(0.0, amount)

    result.hr_total = sum(max(0.0, safe_num(operating.get(key))) for key in SALARY_LINES)

    result.services_total = _per_student_total(
        _items(exp.get(EXP_SERVICES)), SERVICE_LINES, EXP_SERVICES, result.warnings
    )
    result.dorm_total = _per_student_total(
        _items(exp.get(EXP_DORMITORY)), DORMITORY_LINES, EXP_DORMITORY, result.warnings
    )
    return result
