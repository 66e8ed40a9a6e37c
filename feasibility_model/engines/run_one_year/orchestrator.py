# feasibility_model/engines/run_one_year/orchestrator.py
"""
Run a single projection year end-to-end: capacity checks, norm, income,
discounts, expenses and KPI derivation.

Errors and warnings from every stage are accumulated on the YearResult; a
year with errors is still computed in full so callers can show partial
diagnostics.
"""

import logging
from typing import Any, Optional

from feasibility_model.config.accessors import resolve_cohort_bands
from feasibility_model.config.models import EngineConfig, NormYearConfig
from feasibility_model.engines.discounts import calculate_discounts
from feasibility_model.engines.expenses import calculate_total_expenses
from feasibility_model.engines.grades import compute_students_from_grades, summarize_grades_by_band
from feasibility_model.engines.income import compute_income
from feasibility_model.engines.norm import calculate_norm_teachers
from feasibility_model.engines.run_one_year.base import StudentSummary, YearResult
from feasibility_model.engines.run_one_year.kpis import derive_kpis, derive_totals, kpi_warnings
from feasibility_model.engines.run_one_year.validation import resolve_school_capacity, validate_capacity
from feasibility_model.utils.numeric import as_dict, as_list, safe_num

logger = logging.getLogger(__name__)


def run_one_year(
    year_input: Any,
    norm_config: Optional[NormYearConfig] = None,
    config: Optional[EngineConfig] = None,
    year_key: str = "y1",
) -> YearResult:
    """
    Compute one projection year.

    Args:
        year_input: A (derived) scenario mapping for the year.
        norm_config: Resolved norm settings; when None the norm stage reports the
            missing settings as errors.
        config: Engine defaults; a fresh EngineConfig is used when omitted.
        year_key: Only used for log messages.

    Returns:
        YearResult with raw values; rounding happens in projections.reporting.
    """
    config = config or EngineConfig()
    data = as_dict(year_input)
    errors = []
    warnings = []

    school_capacity = resolve_school_capacity(data)
    grades = compute_students_from_grades(as_list(data.get("grades")), config.grade_keys)
    bands = summarize_grades_by_band(
        as_list(data.get("grades")),
        resolve_cohort_bands(as_dict(data.get("basics")).get("cohort_bands"), config),
        config.grade_keys,
    )
    utilization = validate_capacity(school_capacity, grades.total_students, errors)
    students = StudentSummary(
        school_capacity=school_capacity, grades=grades, bands=bands, utilization_rate=utilization
    )

    norm = calculate_norm_teachers(
        grades.per_grade,
        norm_config.curriculum_weekly_hours if norm_config else None,
        norm_config.teacher_weekly_max_hours if norm_config else None,
    )
    errors.extend(norm.errors)
    warnings.extend(norm.warnings)

    income = compute_income(grades.total_students, data.get("income"))
    discounts = calculate_discounts(
        tuition_students=income.tuition_students,
        gross_tuition=income.gross_tuition,
        tuition_avg_fee=income.tuition_avg_fee,
        discount_categories=as_list(data.get("discounts")),
    )
    errors.extend(discounts.errors)
    warnings.extend(discounts.warnings)

    expenses = calculate_total_expenses(data.get("expenses"))
    warnings.extend(expenses.warnings)

    totals = derive_totals(income, safe_num(discounts.total_discounts), expenses)
    kpis = derive_kpis(income, totals, expenses, grades.total_students)
    warnings.extend(kpi_warnings(utilization, kpis, config))

    result = YearResult(
        students=students,
        income=income,
        discounts=discounts,
        expenses=expenses,
        totals=totals,
        kpis=kpis,
        norm=norm,
        errors=errors,
        warnings=warnings,
    )
    logger.info(
        f"[RUN_ONE_YEAR {year_key}] students={grades.total_students:.0f} "
        f"net_income={totals.net_income:.2f} expenses={expenses.total_expenses:.2f} "
        f"net_result={totals.net_result:.2f} valid={result.is_valid}"
    )
    if errors:
        logger.warning(f"[RUN_ONE_YEAR {year_key}] {len(errors)} error(s): {errors}")
    return result
