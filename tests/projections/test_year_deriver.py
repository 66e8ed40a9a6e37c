import copy

import pytest

from feasibility_model.engines.grades import BandSummary
from feasibility_model.projections.year_deriver import (
    apply_salary_lines,
    apply_year_student_counts,
    derive_input_for_year,
    inflate_discounts,
    inflate_expenses,
    inflate_income,
    select_capacity_for_year,
    select_grades_for_year,
)
from feasibility_model.state.schema import SALARY_LINES, YEAR_KEYS

pytestmark = pytest.mark.projections

ZERO_SALARIES = {year: {line: 0.0 for line in SALARY_LINES} for year in YEAR_KEYS}


def test_grade_roster_selection():
    y1 = [{"grade": "1", "total_students": 10}]
    y2 = [{"grade": "1", "total_students": 12}]
    wrapped = {"grades_years": {"years": {"y1": y1, "y2": y2}}, "grades": []}
    assert select_grades_for_year(wrapped, "y2") == y2
    assert select_grades_for_year(wrapped, "y3") == y1
    assert select_grades_for_year({"grades_years": {"y2": y2}}, "y2") == y2
    assert select_grades_for_year({"grades": y1}, "y3") == y1
    assert select_grades_for_year({}, "y1") == []


def test_inflate_income_scales_prices_not_counts(scenario):
    original = copy.deepcopy(scenario["income"])
    income = dict(scenario["income"], tuition_fee_per_student_yearly=100)
    inflated = inflate_income(income, 1.1)
    assert inflated["tuition"]["rows"][0]["unit_fee"] == pytest.approx(1100)
    assert inflated["tuition"]["rows"][0]["student_count"] == 10
    assert inflated["other_institution_income"]["rows"][0]["amount"] == pytest.approx(5500)
    assert inflated["government_incentives"] == pytest.approx(1100)
    assert inflated["tuition_fee_per_student_yearly"] == pytest.approx(110)
    assert "lunch_fee_per_student_yearly" not in inflated
    assert scenario["income"] == original


def test_inflate_expenses(scenario):
    inflated = inflate_expenses(scenario["expenses"], 1.1)
    assert inflated["operating"]["items"]["rent"] == pytest.approx(22000)
    assert inflated["services"]["items"]["catering"] == {"student_count": 30, "unit_cost": pytest.approx(55)}
    assert scenario["expenses"]["operating"]["items"]["rent"] == 20000


def test_inflate_expenses_from_legacy_shape():
    inflated = inflate_expenses({"support_staff_yearly_cost": 1000}, 2)
    assert inflated["operating"]["items"] == {"general_administration": 2000}


def test_only_fixed_discounts_follow_inflation():
    inflated = inflate_discounts(
        [{"mode": "fixed", "value": 100, "ratio": 0.1}, {"mode": "percent", "value": 0.2, "ratio": 0.1}], 1.5
    )
    assert inflated[0]["value"] == pytest.approx(150)
    assert inflated[1]["value"] == 0.2


def test_tuition_counts_follow_bands_and_fees_use_manual_counts():
    income = {
        "tuition": {
            "rows": [
                {"key": "pre_primary", "student_count": 1},
                {"key": "primary_local", "student_count": 1},
                {"key": "primary_international", "student_count": 9},
                {"key": "custom", "student_count": 7},
            ]
        },
        "non_education_fees": {
            "rows": [
                {"key": "lunch", "student_count": 10, "student_count_y2": 20},
                {"key": "bus", "student_count": 10, "student_count_y3": 30},
            ]
        },
    }
    y3 = copy.deepcopy(income)
    apply_year_student_counts(income, BandSummary(pre_primary=5, primary=10), "y2")
    assert [r["student_count"] for r in income["tuition"]["rows"]] == [5, 10, 0, 7]
    assert [r["student_count"] for r in income["non_education_fees"]["rows"]] == [20, 10]

    apply_year_student_counts(y3, BandSummary(), "y3")
    assert [r["student_count"] for r in y3["non_education_fees"]["rows"]] == [20, 30]


def test_capacity_selection():
    scenario = {"capacity": {"years": {"y1": 100, "y3": 150}}, "school_capacity": 80}
    assert select_capacity_for_year(scenario, "y2") == 100
    assert select_capacity_for_year(scenario, "y3") == 150
    assert select_capacity_for_year({"school_capacity": 80}, "y2") == 80
    assert select_capacity_for_year({}, "y2") == 0


def test_salary_lines_use_hr_when_present_else_inflate_base():
    base = {"expenses": {"operating": {"items": {"local_staff_salaries": 1000}}}}

    expenses = {"operating": {"items": {}}}
    apply_salary_lines(expenses, base, "y2", 1.1, ZERO_SALARIES)
    assert expenses["operating"]["items"]["local_staff_salaries"] == pytest.approx(1100)
    assert expenses["operating"]["items"]["national_staff_salaries"] == 0

    salaries = copy.deepcopy(ZERO_SALARIES)
    salaries["y1"]["local_staff_salaries"] = 2000
    salaries["y3"]["local_staff_salaries"] = 5000
    y2 = {}
    apply_salary_lines(y2, base, "y2", 1.1, salaries)
    assert y2["operating"]["items"]["local_staff_salaries"] == pytest.approx(2200)
    y3 = {}
    apply_salary_lines(y3, base, "y3", 1.32, salaries)
    assert y3["operating"]["items"]["local_staff_salaries"] == 5000


def test_derive_input_leaves_base_untouched(scenario, engine_config):
    before = copy.deepcopy(scenario)
    factors = {"y1": 1.0, "y2": 1.1, "y3": 1.32}
    derived = derive_input_for_year(scenario, "y3", factors, ZERO_SALARIES, engine_config)
    assert scenario == before
    assert derived["school_capacity"] == 100
    assert derived["income"]["tuition"]["rows"][1]["unit_fee"] == pytest.approx(2640)
    assert derived["expenses"]["operating"]["items"]["local_staff_salaries"] == pytest.approx(39600)
