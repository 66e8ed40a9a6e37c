import copy

import pytest

from feasibility_model.config.models import EngineConfig


# Define pytest markers for test categories
def pytest_configure(config):
    """
    Register custom markers to avoid pytest warnings.
    """
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "quick: mark a test as a quick test for CI")
    config.addinivalue_line("markers", "config: mark a test as a config test")
    config.addinivalue_line("markers", "engines: mark a test as an engines test")
    config.addinivalue_line("markers", "projections: mark a test as a projections test")


BASE_SCENARIO = {
    "name": "fixture",
    "basics": {"inflation": {"y2": 0.10, "y3": 0.20}},
    "school_capacity": 100,
    "grades": [
        {"grade": "KG", "branch_count": 1, "total_students": 10},
        {"grade": "1", "branch_count": 1, "total_students": 20},
        {"grade": "6", "branch_count": 1, "total_students": 10},
    ],
    "income": {
        "tuition": {
            "rows": [
                {"key": "pre_primary", "student_count": 10, "unit_fee": 1000},
                {"key": "primary_local", "student_count": 20, "unit_fee": 2000},
                {"key": "middle_local", "student_count": 10, "unit_fee": 3000},
            ]
        },
        "non_education_fees": {"rows": [{"key": "lunch", "student_count": 30, "unit_fee": 100}]},
        "other_institution_income": {"rows": [{"key": "rental", "amount": 5000}]},
        "government_incentives": 1000,
    },
    "discounts": [{"name": "Sibling", "mode": "percent", "value": 0.5, "ratio": 0.2}],
    "expenses": {
        "operating": {"items": {"rent": 20000, "local_staff_salaries": 30000}},
        "services": {"items": {"catering": {"student_count": 30, "unit_cost": 50}}},
        "dormitory": {"items": {}},
    },
}

BASE_NORM = {
    "teacher_weekly_max_hours": 24,
    "curriculum_weekly_hours": {
        "KG": {"play": 20},
        "1": {"language": 10, "mathematics": 10},
        "6": {"mathematics": 40},
    },
}


@pytest.fixture
def engine_config():
    return EngineConfig()


@pytest.fixture
def scenario():
    """A fresh copy of a small KG/1/6 school scenario."""
    return copy.deepcopy(BASE_SCENARIO)


@pytest.fixture
def norm_config():
    return copy.deepcopy(BASE_NORM)
