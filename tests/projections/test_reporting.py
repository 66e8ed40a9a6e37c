import json

import pytest

from feasibility_model.projections.reporting import calculate_school_feasibility, to_legacy_payload
from feasibility_model.projections.runner import run_feasibility

pytestmark = pytest.mark.projections


@pytest.fixture
def payload(scenario, norm_config):
    return calculate_school_feasibility(scenario, norm_config)


def test_year_one_is_repeated_at_root(payload):
    y1 = payload["years"]["y1"]
    for section in ("students", "income", "expenses", "result", "kpis", "norm", "flags", "is_valid"):
        assert payload[section] == y1[section]
    assert set(payload["years"]) == {"y1", "y2", "y3"}
    assert payload["multi_year_valid"] is True


def test_basics_carry_inflation_metadata(payload):
    assert payload["basics"]["inflation"] == {"y2": 0.1, "y3": 0.2}
    assert payload["basics"]["inflation_factors"]["y1"] == 1.0
    assert payload["basics"]["inflation_factors"]["y3"] == pytest.approx(1.32)


def test_values_are_rounded_to_two_decimals(payload):
    assert payload["income"]["other_income_ratio"] == 0.07
    assert payload["kpis"]["profit_margin"] == 0.36
    assert payload["expenses"]["hr_share"] == 0.58
    assert payload["years"]["y2"]["income"]["tuition_avg_fee"] == 2200.0
    assert payload["result"]["net_result"] == 29500.0
    assert payload["norm"]["required_teachers"] == 4
    assert isinstance(payload["norm"]["required_teachers"], int)


def test_student_section(payload):
    students = payload["students"]
    assert students["utilization_rate"] == 0.4
    assert students["cohort_bands"] == {
        "pre_primary": 10.0,
        "primary": 20.0,
        "middle": 10.0,
        "secondary": 0.0,
        "total": 40.0,
    }
    assert len(students["per_grade"]) == 13


def test_discount_cap_is_reported(scenario, norm_config):
    scenario["discounts"] = [{"name": "A", "value": 0.6, "ratio": 1}, {"name": "B", "value": 0.6, "ratio": 1}]
    payload = calculate_school_feasibility(scenario, norm_config)
    assert payload["income"]["discounts_cap_applied"] == {"original_avg_rate": 1.2, "capped_avg_rate": 1.0}
    assert payload["income"]["total_discounts"] == payload["income"]["gross_tuition"]
    assert [d["effective_rate_part"] for d in payload["income"]["discounts_detail"]] == [0.6, 0.6]
    assert payload["years"]["y1"]["income"]["discounts_cap_applied"] is not None


def test_undefined_kpis_serialize_as_none():
    payload = calculate_school_feasibility({}, {})
    assert payload["kpis"]["revenue_per_student"] is None
    assert payload["students"]["utilization_rate"] is None
    assert payload["flags"]["errors"] == ["school_capacity must be a positive number."]
    json.dumps(payload)


def test_payload_does_not_share_state_with_result(scenario, norm_config):
    result = run_feasibility(scenario, norm_config)
    payload = to_legacy_payload(result)
    payload["basics"]["inflation"]["y2"] = 99
    payload["years"]["y1"]["flags"]["errors"].append("x")
    assert result.inflation.rate_y2 == 0.1
    assert result.years["y1"].errors == []
    assert payload["flags"]["errors"] == []


def test_integer_subject_keys_are_accepted(scenario):
    payload = calculate_school_feasibility(
        scenario, {"teacher_weekly_max_hours": 24, "curriculum_weekly_hours": {"1": {101: 5}}}
    )
    assert payload["norm"]["required_teachers"] == 1
    assert payload["flags"]["errors"] == []


def test_overflowing_teaching_hours_are_reported(scenario):
    scenario["grades"][1]["branch_count"] = 1e10
    payload = calculate_school_feasibility(
        scenario, {"teacher_weekly_max_hours": 24, "curriculum_weekly_hours": {"1": {"math": 1e300}}}
    )
    assert payload["norm"]["required_teachers"] is None
    assert "total teaching hours is not a finite number." in payload["flags"]["errors"]
    assert payload["multi_year_valid"] is False
    json.dumps(payload)
