# feasibility_model/projections/reporting.py
"""
Output adapter: turns the internal FeasibilityResult into the response payload.

All rounding happens here (two decimals, half-up); the engines only ever see
raw floats. The payload keeps the historical shape: year-1 sections are
repeated at the root next to the ``years`` map.
"""

import logging
from copy import deepcopy
from dataclasses import asdict
from typing import Any, Dict, Optional

from feasibility_model.engines.run_one_year import YearResult
from feasibility_model.config.models import EngineConfig
from feasibility_model.projections.runner import FeasibilityResult, run_feasibility
from feasibility_model.state.schema import YEAR_1, YEAR_KEYS
from feasibility_model.utils.decimal_helpers import round2

logger = logging.getLogger(__name__)


def _students(year: YearResult) -> Dict[str, Any]:
    s = year.students
    return {
        "school_capacity": round2(s.school_capacity),
        "total_students": round2(s.total_students),
        "utilization_rate": round2(s.utilization_rate),
        "per_grade": [
            {
                "grade": row.grade,
                "branch_count": round2(row.branch_count),
                "total_students": round2(row.total_students),
            }
            for row in s.grades.per_grade
        ],
        "grade_keys": list(s.grades.grade_keys),
        "cohort_bands": {
            "pre_primary": round2(s.bands.pre_primary),
            "primary": round2(s.bands.primary),
            "middle": round2(s.bands.middle),
            "secondary": round2(s.bands.secondary),
            "total": round2(s.bands.total),
        },
    }


def _cap_applied(year: YearResult) -> Optional[Dict[str, Optional[float]]]:
    cap = year.discounts.cap_applied
    if cap is None:
        return None
    return {
        "original_avg_rate": round2(cap.original_avg_rate),
        "capped_avg_rate": round2(cap.capped_avg_rate),
    }


def _income(year: YearResult) -> Dict[str, Any]:
    inc = year.income
    totals = year.totals
    return {
        "gross_tuition": round2(inc.gross_tuition),
        "tuition_students": round2(inc.tuition_students),
        "tuition_avg_fee": round2(inc.tuition_avg_fee),
        "non_education_fees_total": round2(inc.non_education_fees_total),
        "dormitory_revenues_total": round2(inc.dormitory_revenues_total),
        "activity_gross": round2(inc.activity_gross),
        "other_institution_income_total": round2(inc.other_institution_income_total),
        "government_incentives": round2(inc.government_incentives),
        "other_income_total": round2(inc.other_income_total),
        "total_gross_income": round2(inc.total_gross_income),
        "total_discounts": round2(totals.total_discounts),
        "net_activity_income": round2(totals.net_activity_income),
        "net_income": round2(totals.net_income),
        "other_income_ratio": round2(totals.other_income_ratio),
        "full_legacy_mode": inc.full_legacy_mode,
        "revenue_modes": dict(inc.revenue_modes),
        "discounts_detail": [
            {
                "name": d.name,
                "mode": d.mode,
                "value": round2(d.value),
                "ratio": round2(d.ratio),
                "amount": round2(d.amount),
                "effective_rate_part": round2(d.effective_rate_part),
            }
            for d in year.discounts.details
        ],
        "discounts_cap_applied": _cap_applied(year),
    }


def _expenses(year: YearResult) -> Dict[str, Any]:
    exp = year.expenses
    return {
        "operating_expenses_total": round2(exp.operating_total),
        "non_tuition_services_cost_total": round2(exp.services_total),
        "dormitory_cost_total": round2(exp.dorm_total),
        "total_expenses": round2(exp.total_expenses),
        "hr_total": round2(exp.hr_total),
        "hr_share": round2(year.kpis.hr_share),
    }


def _norm(year: YearResult) -> Dict[str, Any]:
    norm = year.norm
    return {
        "total_teaching_hours": round2(norm.total_teaching_hours),
        "required_teachers": norm.required_teachers,
        "breakdown_by_grade": [
            {
                "grade": g.grade,
                "branch_count": round2(g.branch_count),
                "weekly_teaching_hours": round2(g.weekly_teaching_hours),
            }
            for g in norm.breakdown_by_grade
        ],
        "breakdown_by_subject": [
            {"subject": s.subject, "weekly_teaching_hours": round2(s.weekly_teaching_hours)}
            for s in norm.breakdown_by_subject
        ],
    }


def year_result_to_dict(year: YearResult) -> Dict[str, Any]:
    """Serialize one YearResult with every numeric leaf rounded or None."""
    return {
        "students": _students(year),
        "income": _income(year),
        "expenses": _expenses(year),
        "result": {"net_result": round2(year.totals.net_result)},
        "kpis": {key: round2(value) for key, value in asdict(year.kpis).items()},
        "norm": _norm(year),
        "flags": {"errors": list(year.errors), "warnings": list(year.warnings)},
        "is_valid": year.is_valid,
    }


def to_legacy_payload(result: FeasibilityResult) -> Dict[str, Any]:
    """
    Build the response payload: year 1 flattened at the root, all three years
    under ``years``, inflation metadata under ``basics``.
    """
    years = {year: year_result_to_dict(result.years[year]) for year in YEAR_KEYS}
    basics = deepcopy(result.basics)
    basics["inflation"] = dict(result.inflation.rates)
    basics["inflation_factors"] = dict(result.inflation.factors)

    payload: Dict[str, Any] = deepcopy(years[YEAR_1])
    payload["years"] = years
    payload["basics"] = basics
    payload["multi_year_valid"] = result.multi_year_valid
    return payload


def calculate_school_feasibility(
    scenario: Any,
    norm_config: Any = None,
    config: Optional[EngineConfig] = None,
) -> Dict[str, Any]:
    """Run the three-year projection and return the serializable payload."""
    return to_legacy_payload(run_feasibility(scenario, norm_config, config))
