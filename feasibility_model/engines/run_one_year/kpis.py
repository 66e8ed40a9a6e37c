# feasibility_model/engines/run_one_year/kpis.py
"""
Year-level derived totals, KPIs and the informational warnings raised on them.
"""

import logging
from typing import List, Optional

from feasibility_model.config.models import EngineConfig
from feasibility_model.engines.expenses import ExpenseTotals
from feasibility_model.engines.income import IncomeBreakdown
from feasibility_model.engines.run_one_year.base import Kpis, YearTotals
from feasibility_model.utils.decimal_helpers import round2
from feasibility_model.utils.numeric import safe_div

logger = logging.getLogger(__name__)


def derive_totals(income: IncomeBreakdown, total_discounts: float, expenses: ExpenseTotals) -> YearTotals:
    net_activity_income = income.activity_gross - total_discounts
    net_income = income.total_gross_income - total_discounts
    return YearTotals(
        total_discounts=total_discounts,
        net_activity_income=net_activity_income,
        net_income=net_income,
        other_income_ratio=income.other_income_total / net_income if net_income > 0 else 0.0,
        net_result=net_income - expenses.total_expenses,
    )


def derive_kpis(
    income: IncomeBreakdown,
    totals: YearTotals,
    expenses: ExpenseTotals,
    total_students: float,
) -> Kpis:
    """Per-student figures use tuition payers when there are any, else all students."""
    base = income.tuition_students if income.tuition_students > 0 else total_students
    return Kpis(
        revenue_per_student=safe_div(totals.net_income, base),
        net_activity_income_per_student=safe_div(totals.net_activity_income, base),
        cost_per_student=safe_div(expenses.total_expenses, base),
        profit_per_student=safe_div(totals.net_result, base),
        profit_margin=safe_div(totals.net_result, totals.net_income),
        discount_to_tuition_ratio=safe_div(totals.total_discounts, income.gross_tuition),
        hr_share=safe_div(expenses.hr_total, expenses.total_expenses),
    )


def _pct(rate: float) -> Optional[float]:
    return round2(rate * 100)


def kpi_warnings(utilization_rate: Optional[float], kpis: Kpis, config: EngineConfig) -> List[str]:
    warnings: List[str] = []
    if utilization_rate is not None:
        if utilization_rate < config.low_utilization_threshold:
            warnings.append(f"Low utilization ({_pct(utilization_rate)}%).")
        if utilization_rate > config.high_utilization_threshold:
            warnings.append(f"High utilization ({_pct(utilization_rate)}%). Capacity risk.")
    if kpis.profit_margin is not None and kpis.profit_margin < 0:
        warnings.append("Operating loss (profit margin < 0).")
    if kpis.discount_to_tuition_ratio is not None and kpis.discount_to_tuition_ratio > config.high_discount_ratio_threshold:
        warnings.append("High discount pressure.")
    return warnings
