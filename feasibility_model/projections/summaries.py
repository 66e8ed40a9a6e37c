# feasibility_model/projections/summaries.py
"""
Year-by-year summary table of a feasibility run.

## QuickStart

```python
from feasibility_model.projections.runner import run_feasibility
from feasibility_model.projections.summaries import build_yearly_summary

result = run_feasibility(scenario, norm_config)
summary = build_yearly_summary(result)
print(summary[["total_students", "net_result", "profit_margin"]])
```
"""

import logging

import pandas as pd

from feasibility_model.projections.runner import FeasibilityResult
from feasibility_model.state.schema import YEAR_KEYS
from feasibility_model.utils.decimal_helpers import round2

logger = logging.getLogger(__name__)

SUMMARY_COLUMNS = [
    "inflation_factor",
    "total_students",
    "school_capacity",
    "utilization_rate",
    "total_gross_income",
    "total_discounts",
    "net_income",
    "total_expenses",
    "net_result",
    "profit_margin",
    "required_teachers",
    "error_count",
    "warning_count",
    "is_valid",
]


def build_yearly_summary(result: FeasibilityResult) -> pd.DataFrame:
    """
    One row per projection year with the headline figures, indexed by year key.
    Numeric values are rounded to two decimals, missing KPIs are NaN.
    """
    records = []
    for year in YEAR_KEYS:
        yr = result.years[year]
        records.append({
            "year": year,
            "inflation_factor": result.inflation.factor(year),
            "total_students": round2(yr.students.total_students),
            "school_capacity": round2(yr.students.school_capacity),
            "utilization_rate": round2(yr.students.utilization_rate),
            "total_gross_income": round2(yr.income.total_gross_income),
            "total_discounts": round2(yr.totals.total_discounts),
            "net_income": round2(yr.totals.net_income),
            "total_expenses": round2(yr.expenses.total_expenses),
            "net_result": round2(yr.totals.net_result),
            "profit_margin": round2(yr.kpis.profit_margin),
            "required_teachers": yr.norm.required_teachers,
            "error_count": len(yr.errors),
            "warning_count": len(yr.warnings),
            "is_valid": yr.is_valid,
        })

    summary = pd.DataFrame.from_records(records).set_index("year")
    summary = summary[SUMMARY_COLUMNS]
    numeric_cols = [c for c in SUMMARY_COLUMNS if c not in ("required_teachers", "error_count", "warning_count", "is_valid")]
    summary[numeric_cols] = summary[numeric_cols].astype(float)
    logger.debug(f"Yearly summary built with shape {summary.shape}")
    return summary
