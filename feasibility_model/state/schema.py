# feasibility_model/state/schema.py
# flake8: noqa
"""Centralized schema constants for scenario input and engine output.

This module defines:
  - Canonical grade keys and default cohort-band ranges
  - Projection year keys
  - Revenue, expense and HR line/role/level names
  - The fixed HR role -> salary expense line mapping

All other modules should import from here for consistency.
"""
from __future__ import annotations

from typing import Dict, Optional, Tuple

# -----------------------------------------------------------------------------
# Grades & cohort bands
# -----------------------------------------------------------------------------
PRE_PRIMARY_GRADE = "KG"
DEFAULT_GRADE_KEYS: Tuple[str, ...] = (
    PRE_PRIMARY_GRADE, "1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11", "12",
)

BAND_PRE_PRIMARY = "pre_primary"
BAND_PRIMARY = "primary"
BAND_MIDDLE = "middle"
BAND_SECONDARY = "secondary"
BAND_KEYS: Tuple[str, ...] = (BAND_PRE_PRIMARY, BAND_PRIMARY, BAND_MIDDLE, BAND_SECONDARY)

# band -> (from, to), inclusive
DEFAULT_BAND_RANGES: Dict[str, Tuple[str, str]] = {
    BAND_PRE_PRIMARY: ("KG", "KG"),
    BAND_PRIMARY: ("1", "5"),
    BAND_MIDDLE: ("6", "9"),
    BAND_SECONDARY: ("10", "12"),
}

DEFAULT_TEACHER_WEEKLY_MAX_HOURS = 24.0

# -----------------------------------------------------------------------------
# Projection years
# -----------------------------------------------------------------------------
YEAR_1 = "y1"
YEAR_2 = "y2"
YEAR_3 = "y3"
YEAR_KEYS: Tuple[str, ...] = (YEAR_1, YEAR_2, YEAR_3)

# -----------------------------------------------------------------------------
# Revenue
# -----------------------------------------------------------------------------
REV_TUITION = "tuition"
REV_NON_EDUCATION_FEES = "non_education_fees"
REV_DORMITORY = "dormitory"
REV_OTHER_INSTITUTION_INCOME = "other_institution_income"
REV_GOVERNMENT_INCENTIVES = "government_incentives"
ITEMIZED_REVENUE_CATEGORIES: Tuple[str, ...] = (REV_TUITION, REV_NON_EDUCATION_FEES, REV_DORMITORY)

# Legacy per-student scalar fields, keyed by the category they stand in for
LEGACY_TUITION_FEE = "tuition_fee_per_student_yearly"
LEGACY_LUNCH_FEE = "lunch_fee_per_student_yearly"
LEGACY_DORMITORY_FEE = "dormitory_fee_per_student_yearly"
LEGACY_OTHER_FEE = "other_fee_per_student_yearly"
LEGACY_REVENUE_FIELDS: Dict[str, str] = {
    REV_TUITION: LEGACY_TUITION_FEE,
    REV_NON_EDUCATION_FEES: LEGACY_LUNCH_FEE,
    REV_DORMITORY: LEGACY_DORMITORY_FEE,
}
LEGACY_SCALAR_FEES: Tuple[str, ...] = (
    LEGACY_TUITION_FEE, LEGACY_LUNCH_FEE, LEGACY_DORMITORY_FEE, LEGACY_OTHER_FEE,
)

# Tuition row key -> cohort band providing its student count (None -> always zero)
TUITION_ROW_BANDS: Dict[str, Optional[str]] = {
    "pre_primary": BAND_PRE_PRIMARY,
    "primary_local": BAND_PRIMARY,
    "middle_local": BAND_MIDDLE,
    "secondary_local": BAND_SECONDARY,
    "primary_international": None,
    "middle_international": None,
    "secondary_international": None,
}

STUDENT_COUNT = "student_count"
STUDENT_COUNT_Y2 = "student_count_y2"
STUDENT_COUNT_Y3 = "student_count_y3"

# -----------------------------------------------------------------------------
# Expenses
# -----------------------------------------------------------------------------
SAL_NATIONAL_STAFF = "national_staff_salaries"
SAL_NATIONAL_SUPPORT_STAFF = "national_support_staff_salaries"
SAL_LOCAL_STAFF = "local_staff_salaries"
SAL_LOCAL_SUPPORT_STAFF = "local_support_staff_salaries"
SAL_INTERNATIONAL_STAFF = "international_staff_salaries"
SALARY_LINES: Tuple[str, ...] = (
    SAL_NATIONAL_STAFF,
    SAL_NATIONAL_SUPPORT_STAFF,
    SAL_LOCAL_STAFF,
    SAL_LOCAL_SUPPORT_STAFF,
    SAL_INTERNATIONAL_STAFF,
)

GENERAL_ADMINISTRATION = "general_administration"
OPERATING_LINES: Tuple[str, ...] = (
    "country_representation",
    GENERAL_ADMINISTRATION,
    "rent",
    "imputed_rent",
    "energy_and_canteen",
    SAL_NATIONAL_STAFF,
    SAL_NATIONAL_SUPPORT_STAFF,
    SAL_LOCAL_STAFF,
    SAL_LOCAL_SUPPORT_STAFF,
    SAL_INTERNATIONAL_STAFF,
    "outsourced_services",
    "educational_materials",
    "financial_expenses",
    "educational_services",
    "hospitality",
    "domestic_travel",
    "international_travel",
    "official_fees",
    "taxes",
    "fixed_asset_investment",
    "routine_maintenance",
    "marketing_and_events",
    "advertising",
    "uncollectible_revenue",
)
SERVICE_LINES: Tuple[str, ...] = ("catering", "uniforms", "books_and_stationery", "transport")
DORMITORY_LINES: Tuple[str, ...] = ("dormitory_costs", "other_dormitory")

EXP_OPERATING = "operating"
EXP_SERVICES = "services"
EXP_DORMITORY = "dormitory"

# Pre-itemized expense fields, collapsed into general administration
LEGACY_EXPENSE_FIELDS: Tuple[str, ...] = (
    "education_staff_yearly_cost_total",
    "management_staff_yearly_cost",
    "support_staff_yearly_cost",
    "operational_expenses_yearly",
)

# -----------------------------------------------------------------------------
# HR
# -----------------------------------------------------------------------------
HR_LEVELS: Tuple[str, ...] = (
    "pre_primary",
    "primary_local",
    "primary_international",
    "middle_local",
    "middle_international",
    "secondary_local",
    "secondary_international",
)

ROLE_NATIONAL_PRINCIPAL = "national_principal"
ROLE_NATIONAL_VICE_PRINCIPAL = "national_vice_principal"
ROLE_NATIONAL_EDUCATOR = "national_educator"
ROLE_NATIONAL_REPRESENTATIVE = "national_representative"
ROLE_LOCAL_LEADER_EDUCATOR = "local_leader_educator"
ROLE_LOCAL_SUPPORT = "local_support"
ROLE_LOCAL_REPRESENTATIVE_SUPPORT = "local_representative_support"
ROLE_INTERNATIONAL_LEADER_EDUCATOR = "international_leader_educator"
HR_ROLES: Tuple[str, ...] = (
    ROLE_NATIONAL_PRINCIPAL,
    ROLE_NATIONAL_VICE_PRINCIPAL,
    ROLE_NATIONAL_EDUCATOR,
    ROLE_NATIONAL_REPRESENTATIVE,
    ROLE_LOCAL_LEADER_EDUCATOR,
    ROLE_LOCAL_SUPPORT,
    ROLE_LOCAL_REPRESENTATIVE_SUPPORT,
    ROLE_INTERNATIONAL_LEADER_EDUCATOR,
)

SALARY_LINE_ROLES: Dict[str, Tuple[str, ...]] = {
    SAL_NATIONAL_STAFF: (ROLE_NATIONAL_PRINCIPAL, ROLE_NATIONAL_VICE_PRINCIPAL, ROLE_NATIONAL_EDUCATOR),
    SAL_NATIONAL_SUPPORT_STAFF: (ROLE_NATIONAL_REPRESENTATIVE,),
    SAL_LOCAL_STAFF: (ROLE_LOCAL_LEADER_EDUCATOR,),
    SAL_LOCAL_SUPPORT_STAFF: (ROLE_LOCAL_SUPPORT, ROLE_LOCAL_REPRESENTATIVE_SUPPORT),
    SAL_INTERNATIONAL_STAFF: (ROLE_INTERNATIONAL_LEADER_EDUCATOR,),
}

# -----------------------------------------------------------------------------
# Discounts
# -----------------------------------------------------------------------------
DISCOUNT_MODE_PERCENT = "percent"
DISCOUNT_MODE_FIXED = "fixed"
