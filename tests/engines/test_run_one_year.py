import pytest

from feasibility_model.config.models import NormYearConfig
from feasibility_model.engines.run_one_year import run_one_year
from feasibility_model.engines.run_one_year.kpis import kpi_warnings
from feasibility_model.engines.run_one_year.base import Kpis
from feasibility_model.engines.run_one_year.validation import resolve_school_capacity, validate_capacity

pytestmark = pytest.mark.engines


@pytest.fixture
def year_norm(norm_config):
    return NormYearConfig(**norm_config)


def test_full_year(scenario, year_norm, engine_config):
    year = run_one_year(scenario, year_norm, engine_config)

    assert year.is_valid
    assert year.students.total_students == 40
    assert year.students.utilization_rate == pytest.approx(0.4)
    assert year.students.bands.middle == 10

    assert year.income.gross_tuition == 80000
    assert year.totals.total_discounts == pytest.approx(8000)
    assert year.totals.net_activity_income == pytest.approx(75000)
    assert year.totals.net_income == pytest.approx(81000)
    assert year.totals.other_income_ratio == pytest.approx(6000 / 81000)

    assert year.expenses.total_expenses == 51500
    assert year.totals.net_result == pytest.approx(29500)

    assert year.kpis.revenue_per_student == pytest.approx(2025)
    assert year.kpis.cost_per_student == pytest.approx(1287.5)
    assert year.kpis.profit_per_student == pytest.approx(737.5)
    assert year.kpis.profit_margin == pytest.approx(29500 / 81000)
    assert year.kpis.discount_to_tuition_ratio == pytest.approx(0.1)
    assert year.kpis.hr_share == pytest.approx(30000 / 51500)

    assert year.norm.total_teaching_hours == 80
    assert year.norm.required_teachers == 4
    assert year.warnings == ["Low utilization (40.0%)."]


def test_utilization_example(engine_config):
    year = run_one_year(
        {"school_capacity": 100, "grades": [{"grade": "1", "branch_count": 2, "total_students": 40}]},
        NormYearConfig(),
        engine_config,
    )
    assert year.students.utilization_rate == pytest.approx(0.4)
    assert year.is_valid


def test_students_over_capacity_is_an_error(scenario, year_norm):
    scenario["school_capacity"] = 30
    year = run_one_year(scenario, year_norm)
    assert "total_students exceeds school_capacity." in year.errors
    assert not year.is_valid
    assert "High utilization (133.33%). Capacity risk." in year.warnings


def test_missing_capacity_is_an_error_but_year_is_still_computed(scenario, year_norm):
    del scenario["school_capacity"]
    year = run_one_year(scenario, year_norm)
    assert year.errors == ["school_capacity must be a positive number."]
    assert year.students.utilization_rate is None
    assert year.totals.net_result == pytest.approx(29500)


def test_missing_norm_config_reports_errors(scenario):
    year = run_one_year(scenario, None)
    assert "teacher_weekly_max_hours must be a positive number." in year.errors
    assert "curriculum_weekly_hours is required (mapping)." in year.errors
    assert year.norm.required_teachers is None


def test_empty_scenario_does_not_raise():
    year = run_one_year({}, NormYearConfig())
    assert year.students.total_students == 0
    assert year.kpis.revenue_per_student is None
    assert year.kpis.profit_margin is None
    assert not year.is_valid


def test_capacity_falls_back_to_base_year_capacity():
    assert resolve_school_capacity({"capacity": {"years": {"y1": 120}}}) == 120
    assert resolve_school_capacity({"school_capacity": 0, "capacity": {"years": {"y1": 90}}}) == 90
    assert resolve_school_capacity({"school_capacity": "75"}) == 75


def test_validate_capacity():
    errors = []
    assert validate_capacity(100, 40, errors) == pytest.approx(0.4)
    assert errors == []
    assert validate_capacity(0, 10, errors) is None
    assert errors == ["school_capacity must be a positive number."]


def test_loss_and_discount_pressure_warnings(engine_config):
    kpis = Kpis(profit_margin=-0.1, discount_to_tuition_ratio=0.35)
    assert kpi_warnings(0.8, kpis, engine_config) == [
        "Operating loss (profit margin < 0).",
        "High discount pressure.",
    ]
