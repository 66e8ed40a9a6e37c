# feasibility_model/engines/norm.py
"""
Engine for estimating required teaching staff from curriculum hours.

Weekly teaching hours scale with the number of class sections (branches) per
grade, not with head count: every section of a grade needs the full weekly
curriculum of that grade.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from feasibility_model.engines.grades import GradeRow
from feasibility_model.utils.numeric import safe_num, to_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeTeachingHours:
    grade: str
    branch_count: float
    weekly_teaching_hours: float


@dataclass(frozen=True)
class SubjectTeachingHours:
    subject: str
    weekly_teaching_hours: float


@dataclass
class NormResult:
    total_teaching_hours: Optional[float] = None
    required_teachers: Optional[int] = None
    breakdown_by_grade: List[GradeTeachingHours] = field(default_factory=list)
    breakdown_by_subject: List[SubjectTeachingHours] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def calculate_norm_teachers(
    grade_branches: Iterable[GradeRow],
    curriculum_weekly_hours: Any,
    teacher_weekly_max_hours: Any,
) -> NormResult:
    """
    Compute weekly teaching hours and the number of teachers needed to cover them.

    Args:
        grade_branches: Per-grade rows; only ``grade`` and ``branch_count`` are used.
        curriculum_weekly_hours: grade -> subject -> weekly hours per class section.
        teacher_weekly_max_hours: Maximum weekly teaching load of one teacher.

    Returns:
        NormResult. When inputs are invalid the totals are None, the breakdowns
        are empty and ``errors`` explains why.
    """
    result = NormResult()

    max_hours = to_number(teacher_weekly_max_hours)
    if max_hours is None or max_hours <= 0:
        result.errors.append("teacher_weekly_max_hours must be a positive number.")
    if not isinstance(curriculum_weekly_hours, dict):
        result.errors.append("curriculum_weekly_hours is required (mapping).")
    if result.errors:
        return result

    total_hours = 0.0
    subject_totals: Dict[str, float] = {}

    for row in grade_branches or []:
        branch_count = safe_num(row.branch_count)
        grade_curriculum = curriculum_weekly_hours.get(row.grade)
        if not isinstance(grade_curriculum, dict):
            grade_curriculum = {}
        grade_hours = 0.0

        for subject, hours_per_class in grade_curriculum.items():
            hours = to_number(hours_per_class)
            if hours is None or hours < 0:
                continue
            subject_hours = hours * branch_count
            grade_hours += subject_hours
            subject_totals[subject] = subject_totals.get(subject, 0.0) + subject_hours

        result.breakdown_by_grade.append(
            GradeTeachingHours(grade=row.grade, branch_count=branch_count, weekly_teaching_hours=grade_hours)
        )
        total_hours += grade_hours

    result.total_teaching_hours = total_hours
    teachers_needed = total_hours / max_hours
    if math.isfinite(teachers_needed):
        result.required_teachers = math.ceil(teachers_needed)
    else:
        result.errors.append("total teaching hours is not a finite number.")
    # sorted() is stable, so equal totals keep first-seen subject order
    result.breakdown_by_subject = sorted(
        (SubjectTeachingHours(subject=str(s), weekly_teaching_hours=h) for s, h in subject_totals.items()),
        key=lambda item: item.weekly_teaching_hours,
        reverse=True,
    )
    logger.debug(
        f"Norm: {total_hours:.2f} weekly hours / {max_hours} -> {result.required_teachers} teachers"
    )
    return result
