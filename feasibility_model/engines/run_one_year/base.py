# feasibility_model/engines/run_one_year/base.py
"""
Base module for the run_one_year package.

Contains the result data structures of a single projection year. This module
must not import from other run_one_year modules to prevent circular dependencies.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from feasibility_model.engines.discounts import DiscountResult
from feasibility_model.engines.expenses import ExpenseTotals
from feasibility_model.engines.grades import BandSummary, GradeTable
from feasibility_model.engines.income import IncomeBreakdown
from feasibility_model.engines.norm import NormResult


@dataclass
class StudentSummary:
    school_capacity: float
    grades: GradeTable
    bands: BandSummary
    utilization_rate: Optional[float] = None

    @property
    def total_students(self) -> float:
        return self.grades.total_students


@dataclass
class YearTotals:
    total_discounts: float = 0.0
    net_activity_income: float = 0.0
    net_income: float = 0.0
    other_income_ratio: float = 0.0
    net_result: float = 0.0


@dataclass
class Kpis:
    revenue_per_student: Optional[float] = None
    net_activity_income_per_student: Optional[float] = None
    cost_per_student: Optional[float] = None
    profit_per_student: Optional[float] = None
    profit_margin: Optional[float] = None
    discount_to_tuition_ratio: Optional[float] = None
    hr_share: Optional[float] = None


@dataclass
class YearResult:
    """Everything computed for one projection year, unrounded."""

    students: StudentSummary
    income: IncomeBreakdown
    discounts: DiscountResult
    expenses: ExpenseTotals
    totals: YearTotals
    kpis: Kpis
    norm: NormResult
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
