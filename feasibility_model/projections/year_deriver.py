# feasibility_model/projections/year_deriver.py
"""
Derive a projection year's input from the base-year scenario.

Year 2 and 3 are not entered separately: prices are inflated from year 1,
while rosters, capacity, manual fee/dormitory head counts and HR grids may be
given per year. Everything here works on deep copies; the base scenario is
never mutated.
"""

import logging
from copy import deepcopy
from typing import Any, Dict, List, Mapping

from feasibility_model.config.accessors import resolve_cohort_bands
from feasibility_model.config.models import EngineConfig
from feasibility_model.engines.expenses import resolve_expense_shape
from feasibility_model.engines.grades import BandSummary, summarize_grades_by_band
from feasibility_model.state.schema import (
    DISCOUNT_MODE_FIXED,
    DISCOUNT_MODE_PERCENT,
    EXP_DORMITORY,
    EXP_OPERATING,
    EXP_SERVICES,
    LEGACY_SCALAR_FEES,
    REV_DORMITORY,
    REV_GOVERNMENT_INCENTIVES,
    REV_NON_EDUCATION_FEES,
    REV_OTHER_INSTITUTION_INCOME,
    REV_TUITION,
    SALARY_LINES,
    STUDENT_COUNT,
    STUDENT_COUNT_Y2,
    STUDENT_COUNT_Y3,
    TUITION_ROW_BANDS,
    YEAR_1,
    YEAR_2,
    YEAR_3,
)
from feasibility_model.utils.numeric import as_dict, as_list, safe_num

logger = logging.getLogger(__name__)


def select_grades_for_year(scenario: Mapping[str, Any], year_key: str) -> List[Any]:
    """Year roster -> year-1 roster -> shared ``grades`` roster -> empty."""
    grades_years = scenario.get("grades_years")
    if isinstance(grades_years, dict):
        years = grades_years.get("years") if isinstance(grades_years.get("years"), dict) else grades_years
        if isinstance(years.get(year_key), list):
            return years[year_key]
        if isinstance(years.get(YEAR_1), list):
            return years[YEAR_1]
    return as_list(scenario.get("grades"))


def inflate_income(income: Any, factor: float) -> Dict[str, Any]:
    """Scale unit fees, lump sums, incentives and legacy per-student fees."""
    out = deepcopy(as_dict(income))

    for category in (REV_TUITION, REV_NON_EDUCATION_FEES, REV_DORMITORY):
        section = out.get(category)
        if isinstance(section, dict) and isinstance(section.get("rows"), list):
            section["rows"] = [
                {**row, "unit_fee": safe_num(row.get("unit_fee")) * factor}
                for row in section["rows"]
                if isinstance(row, dict)
            ]

    other = out.get(REV_OTHER_INSTITUTION_INCOME)
    if isinstance(other, dict) and isinstance(other.get("rows"), list):
        other["rows"] = [
            {**row, "amount": safe_num(row.get("amount")) * factor}
            for row in other["rows"]
            if isinstance(row, dict)
        ]

    for key in (REV_GOVERNMENT_INCENTIVES,) + LEGACY_SCALAR_FEES:
        if out.get(key) is not None:
            out[key] = safe_num(out[key]) * factor
    return out


def inflate_expenses(expenses: Any, factor: float) -> Dict[str, Any]:
    """Scale operating amounts and per-student unit costs; head counts stay put."""
    out = deepcopy(resolve_expense_shape(expenses))

    operating = as_dict(out.get(EXP_OPERATING))
    items = as_dict(operating.get("items"))
    operating["items"] = {key: safe_num(value) * factor for key, value in items.items()}
    out[EXP_OPERATING] = operating

    for family in (EXP_SERVICES, EXP_DORMITORY):
        section = as_dict(out.get(family))
        section["items"] = {
            key: {
                **as_dict(row),
                "unit_cost": safe_num(as_dict(row).get("unit_cost")) * factor,
                "student_count": safe_num(as_dict(row).get("student_count")),
            }
            for key, row in as_dict(section.get("items")).items()
        }
        out[family] = section
    return out


def inflate_discounts(discounts: Any, factor: float) -> List[Any]:
    """Fixed per-recipient amounts follow prices; percentages do not."""
    inflated: List[Any] = []
    for category in as_list(discounts):
        if not isinstance(category, dict):
            inflated.append(deepcopy(category))
            continue
        row = deepcopy(category)
        if str(category.get("mode") or DISCOUNT_MODE_PERCENT) == DISCOUNT_MODE_FIXED:
            row["value"] = safe_num(category.get("value")) * factor
        inflated.append(row)
    return inflated


def _manual_student_count(row: Mapping[str, Any], year_key: str) -> float:
    if year_key == YEAR_2:
        chain = (STUDENT_COUNT_Y2, STUDENT_COUNT)
    elif year_key == YEAR_3:
        chain = (STUDENT_COUNT_Y3, STUDENT_COUNT_Y2, STUDENT_COUNT)
    else:
        chain = (STUDENT_COUNT,)
    for key in chain:
        if row.get(key) is not None:
            return safe_num(row[key])
    return 0.0


def apply_year_student_counts(income: Dict[str, Any], bands: BandSummary, year_key: str) -> None:
    """
    Set per-year head counts on the (already copied) income rows.

    Tuition rows follow the year's roster through their cohort band;
    international-track rows are always zero. Fee and dormitory rows use the
    manual per-year counts.
    """
    tuition = income.get(REV_TUITION)
    if isinstance(tuition, dict) and isinstance(tuition.get("rows"), list):
        rows = []
        for row in tuition["rows"]:
            key = str(row.get("key") or "")
            if key in TUITION_ROW_BANDS:
                band = TUITION_ROW_BANDS[key]
                row = {**row, STUDENT_COUNT: bands.get(band) if band else 0.0}
            rows.append(row)
        tuition["rows"] = rows

    for category in (REV_NON_EDUCATION_FEES, REV_DORMITORY):
        section = income.get(category)
        if isinstance(section, dict) and isinstance(section.get("rows"), list):
            section["rows"] = [
                {**row, STUDENT_COUNT: _manual_student_count(row, year_key)} for row in section["rows"]
            ]


def select_capacity_for_year(scenario: Mapping[str, Any], year_key: str) -> float:
    """Year capacity -> year-1 capacity -> legacy ``school_capacity`` -> 0."""
    years = as_dict(as_dict(scenario.get("capacity")).get("years"))
    for candidate in (years.get(year_key), years.get(YEAR_1), scenario.get("school_capacity")):
        value = safe_num(candidate)
        if value > 0:
            return value
    return 0.0


def apply_salary_lines(
    expenses: Dict[str, Any],
    base_scenario: Mapping[str, Any],
    year_key: str,
    factor: float,
    salary_by_year: Mapping[str, Mapping[str, float]],
) -> None:
    """
    Overwrite the five salary lines: the year's HR-derived figure when positive,
    otherwise the year-1 figure (HR-derived, else the entered amount) x factor.
    """
    operating = expenses.setdefault(EXP_OPERATING, {})
    items = operating.setdefault("items", {})
    base_items = as_dict(as_dict(as_dict(base_scenario.get("expenses")).get(EXP_OPERATING)).get("items"))
    hr_y1 = as_dict(salary_by_year.get(YEAR_1))
    hr_year = as_dict(salary_by_year.get(year_key))

    for line in SALARY_LINES:
        from_hr_y1 = safe_num(hr_y1.get(line))
        base = from_hr_y1 if from_hr_y1 > 0 else safe_num(base_items.get(line))
        from_hr = safe_num(hr_year.get(line))
        items[line] = from_hr if from_hr > 0 else base * factor


def derive_input_for_year(
    base_scenario: Any,
    year_key: str,
    factors: Mapping[str, float],
    salary_by_year: Mapping[str, Mapping[str, float]],
    config: EngineConfig,
) -> Dict[str, Any]:
    """
    Build the scenario mapping used to compute ``year_key``.

    Args:
        base_scenario: The base-year scenario (left untouched).
        year_key: ``y1``, ``y2`` or ``y3``.
        factors: Cumulative inflation factor per year.
        salary_by_year: Salary expense lines per year from engines.salaries.
        config: Engine defaults (grade keys, cohort bands).

    Returns:
        A new scenario mapping for the year.
    """
    base = as_dict(base_scenario)
    factor = factors.get(year_key, 1.0)

    derived = deepcopy(base)
    derived["grades"] = deepcopy(select_grades_for_year(base, year_key))
    derived["income"] = inflate_income(base.get("income"), factor)
    derived["expenses"] = inflate_expenses(base.get("expenses"), factor)
    derived["discounts"] = inflate_discounts(base.get("discounts"), factor)

    bands = summarize_grades_by_band(
        derived["grades"],
        resolve_cohort_bands(as_dict(base.get("basics")).get("cohort_bands"), config),
        config.grade_keys,
    )
    apply_year_student_counts(derived["income"], bands, year_key)

    derived["school_capacity"] = select_capacity_for_year(base, year_key)
    apply_salary_lines(derived["expenses"], base, year_key, factor, salary_by_year)

    logger.debug(
        f"[DERIVE {year_key}] factor={factor:.4f} band_total={bands.total:.0f} "
        f"capacity={derived['school_capacity']:.0f}"
    )
    return derived
