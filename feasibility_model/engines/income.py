# feasibility_model/engines/income.py
"""
Engine for aggregating gross revenue for one projection year.

Each main revenue category (tuition, non-education fees, dormitory) is given
either as itemized rows (student count x unit fee) or, for older scenarios, as
a single per-student yearly fee. The shape is resolved once per category by
``resolve_revenue_sources`` and the accumulation code only ever sees the
resolved ``ItemizedRevenue`` / ``LegacyRevenue`` values.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from feasibility_model.state.schema import (
    ITEMIZED_REVENUE_CATEGORIES,
    LEGACY_OTHER_FEE,
    LEGACY_REVENUE_FIELDS,
    REV_DORMITORY,
    REV_GOVERNMENT_INCENTIVES,
    REV_NON_EDUCATION_FEES,
    REV_OTHER_INSTITUTION_INCOME,
    REV_TUITION,
)
from feasibility_model.utils.numeric import as_dict, as_list, safe_num

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemizedRevenue:
    rows: List[Dict[str, Any]]

    def students(self) -> float:
        return sum(safe_num(r.get("student_count")) for r in self.rows)

    def gross(self) -> float:
        return sum(safe_num(r.get("student_count")) * safe_num(r.get("unit_fee")) for r in self.rows)


@dataclass(frozen=True)
class LegacyRevenue:
    per_student_fee: float

    def gross(self, total_students: float) -> float:
        return total_students * self.per_student_fee


RevenueSource = Union[ItemizedRevenue, LegacyRevenue]


@dataclass(frozen=True)
class RevenueSources:
    """Resolved revenue shape for one year's income section."""

    tuition: RevenueSource
    non_education_fees: RevenueSource
    dormitory: RevenueSource
    other_institution_rows: List[Dict[str, Any]]
    government_incentives: float
    legacy_other_fee: float

    @property
    def full_legacy(self) -> bool:
        """True when none of the three main categories is itemized."""
        return not any(
            isinstance(src, ItemizedRevenue)
            for src in (self.tuition, self.non_education_fees, self.dormitory)
        )


@dataclass
class IncomeBreakdown:
    tuition_students: float = 0.0
    tuition_avg_fee: float = 0.0
    gross_tuition: float = 0.0
    non_education_fees_total: float = 0.0
    dormitory_revenues_total: float = 0.0
    activity_gross: float = 0.0
    other_institution_income_total: float = 0.0
    government_incentives: float = 0.0
    other_income_total: float = 0.0
    total_gross_income: float = 0.0
    full_legacy_mode: bool = False
    revenue_modes: Dict[str, str] = field(default_factory=dict)


def _rows(value: Any) -> List[Dict[str, Any]]:
    return [r for r in as_list(as_dict(value).get("rows")) if isinstance(r, dict)]


def resolve_revenue_sources(income: Any) -> RevenueSources:
    """Decide, per category, whether itemized rows or the legacy scalar applies."""
    inc = as_dict(income)
    resolved: Dict[str, RevenueSource] = {}
    for category in ITEMIZED_REVENUE_CATEGORIES:
        rows = _rows(inc.get(category))
        if rows:
            resolved[category] = ItemizedRevenue(rows=rows)
        else:
            resolved[category] = LegacyRevenue(per_student_fee=safe_num(inc.get(LEGACY_REVENUE_FIELDS[category])))
    return RevenueSources(
        tuition=resolved[REV_TUITION],
        non_education_fees=resolved[REV_NON_EDUCATION_FEES],
        dormitory=resolved[REV_DORMITORY],
        other_institution_rows=_rows(inc.get(REV_OTHER_INSTITUTION_INCOME)),
        government_incentives=safe_num(inc.get(REV_GOVERNMENT_INCENTIVES)),
        legacy_other_fee=safe_num(inc.get(LEGACY_OTHER_FEE)),
    )


def _category_gross(source: RevenueSource, total_students: float) -> float:
    if isinstance(source, ItemizedRevenue):
        return source.gross()
    return source.gross(total_students)


def compute_income(total_students: Any, income: Any) -> IncomeBreakdown:
    """
    Aggregate gross revenue for a year.

    Args:
        total_students: School-wide student total (used by legacy per-student fees
            and as the tuition head count fallback).
        income: The scenario's income section.

    Returns:
        IncomeBreakdown with raw (unrounded) totals.
    """
    students = safe_num(total_students)
    sources = resolve_revenue_sources(income)
    out = IncomeBreakdown(
        full_legacy_mode=sources.full_legacy,
        revenue_modes={
            REV_TUITION: _mode(sources.tuition),
            REV_NON_EDUCATION_FEES: _mode(sources.non_education_fees),
            REV_DORMITORY: _mode(sources.dormitory),
        },
    )

    if isinstance(sources.tuition, ItemizedRevenue):
        out.tuition_students = sources.tuition.students()
    else:
        out.tuition_students = students
    out.gross_tuition = _category_gross(sources.tuition, students)
    if out.tuition_students <= 0:
        out.tuition_students = students
    out.tuition_avg_fee = out.gross_tuition / out.tuition_students if out.tuition_students > 0 else 0.0

    out.non_education_fees_total = _category_gross(sources.non_education_fees, students)
    out.dormitory_revenues_total = _category_gross(sources.dormitory, students)

    other_institution_total = sum(safe_num(r.get("amount")) for r in sources.other_institution_rows)
    other_income_total = other_institution_total + sources.government_incentives

    out.activity_gross = out.gross_tuition + out.non_education_fees_total + out.dormitory_revenues_total

    if sources.full_legacy:
        # Older scenarios kept every fee per student; the extra fee belongs to
        # activity revenue and lump-sum other income is not counted at all.
        out.activity_gross += students * sources.legacy_other_fee
        if other_income_total:
            logger.info(
                f"Full-legacy income: ignoring other income of {other_income_total:.2f}"
            )
    else:
        out.other_institution_income_total = other_institution_total
        out.government_incentives = sources.government_incentives
        out.other_income_total = other_income_total

    out.total_gross_income = out.activity_gross + out.other_income_total
    return out


def _mode(source: RevenueSource) -> str:
    return "itemized" if isinstance(source, ItemizedRevenue) else "legacy"
