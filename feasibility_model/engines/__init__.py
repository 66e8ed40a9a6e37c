"""
Engines package for the feasibility model.

This package contains the per-component calculators and the single-year orchestrator.
"""

from .run_one_year import run_one_year

__all__ = ["run_one_year"]
