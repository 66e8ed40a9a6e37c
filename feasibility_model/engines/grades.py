# feasibility_model/engines/grades.py
"""
Grade roster aggregation: canonical per-grade table and cohort-band totals.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Sequence

from feasibility_model.config.models import CohortBand
from feasibility_model.state.schema import BAND_KEYS
from feasibility_model.utils.numeric import safe_num

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeRow:
    grade: str
    branch_count: float = 0.0
    total_students: float = 0.0


@dataclass
class GradeTable:
    """Per-grade rows in canonical order plus the school-wide student total."""

    per_grade: List[GradeRow]
    total_students: float
    grade_keys: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class BandSummary:
    pre_primary: float = 0.0
    primary: float = 0.0
    middle: float = 0.0
    secondary: float = 0.0

    @property
    def total(self) -> float:
        return self.pre_primary + self.primary + self.middle + self.secondary

    def get(self, band: str) -> float:
        return getattr(self, band)


def compute_students_from_grades(
    grade_inputs: Iterable[Any], grade_keys: Sequence[str]
) -> GradeTable:
    """
    Normalize a sparse, arbitrary-order roster into one row per canonical grade.

    Rows whose grade is not a canonical key (or that are not mappings) are
    ignored; grades without a row get zero branches and students. When a grade
    appears twice the last row wins.
    """
    rows_by_grade: Dict[str, Mapping[str, Any]] = {}
    known = set(grade_keys)
    for row in grade_inputs or []:
        if not isinstance(row, dict):
            continue
        grade = str(row.get("grade"))
        if grade not in known:
            logger.debug(f"Ignoring roster row for unknown grade '{grade}'")
            continue
        rows_by_grade[grade] = row

    per_grade: List[GradeRow] = []
    total_students = 0.0
    for grade in grade_keys:
        row = rows_by_grade.get(grade, {})
        grade_row = GradeRow(
            grade=grade,
            branch_count=safe_num(row.get("branch_count")),
            total_students=safe_num(row.get("total_students")),
        )
        per_grade.append(grade_row)
        total_students += grade_row.total_students

    return GradeTable(per_grade=per_grade, total_students=total_students, grade_keys=list(grade_keys))


def summarize_grades_by_band(
    grade_inputs: Iterable[Any],
    bands: Mapping[str, CohortBand],
    grade_keys: Sequence[str],
) -> BandSummary:
    """Sum per-grade students into the four cohort bands (disabled bands are 0)."""
    table = compute_students_from_grades(grade_inputs, grade_keys)
    by_grade = {row.grade: row.total_students for row in table.per_grade}
    index = {grade: i for i, grade in enumerate(grade_keys)}

    def sum_range(band: CohortBand) -> float:
        if not band.enabled:
            return 0.0
        i1 = index.get(band.from_grade)
        i2 = index.get(band.to_grade)
        if i1 is None or i2 is None:
            return 0.0
        lo, hi = min(i1, i2), max(i1, i2)
        return sum(by_grade[grade_keys[i]] for i in range(lo, hi + 1))

    return BandSummary(**{band: sum_range(bands[band]) for band in BAND_KEYS})
