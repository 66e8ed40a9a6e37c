"""
Run One Year Package

This package contains the single-year feasibility engine: capacity checks,
norm, income, discounts, expenses and KPI derivation for one projection year.
"""

from .base import YearResult
from .orchestrator import run_one_year

__all__ = ["run_one_year", "YearResult"]
