# feasibility_model/engines/discounts.py
"""
Engine for tuition discounts (scholarships, sibling discounts, staff children...).

Every category contributes an *effective rate part* against gross tuition. The
parts are summed into a blended average rate which is capped at 100%, so total
discounts can never exceed gross tuition however the categories are defined.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from feasibility_model.state.schema import DISCOUNT_MODE_FIXED, DISCOUNT_MODE_PERCENT
from feasibility_model.utils.numeric import clamp, safe_num, to_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiscountDetail:
    name: str
    mode: str
    value: float
    ratio: float
    amount: float
    effective_rate_part: float


@dataclass(frozen=True)
class CapApplied:
    original_avg_rate: float
    capped_avg_rate: float


@dataclass
class DiscountResult:
    total_discounts: Optional[float] = None
    avg_discount_rate: float = 0.0
    details: List[DiscountDetail] = field(default_factory=list)
    cap_applied: Optional[CapApplied] = None
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def _optional_number(raw: Any) -> Optional[float]:
    # unset means zero; anything present must be numeric
    return 0.0 if raw is None or raw == "" else to_number(raw)


def calculate_discounts(
    tuition_students: Any,
    gross_tuition: Any,
    tuition_avg_fee: Any,
    discount_categories: Optional[Iterable[Any]],
) -> DiscountResult:
    """
    Weighted-average discount applied to gross tuition.

    - ``percent`` (default): ``value`` is a fraction (clamped to [0, 1]) given to
      ``ratio`` of tuition-paying students.
    - ``fixed``: ``value`` is a flat amount per recipient; converted to a rate
      through the average tuition fee.

    Categories with a negative value or an invalid ratio are dropped with a
    warning. Negative head counts or gross tuition are errors and leave
    ``total_discounts`` as None.
    """
    result = DiscountResult()
    students = safe_num(tuition_students)
    gross = safe_num(gross_tuition)
    avg_fee = safe_num(tuition_avg_fee)

    if students < 0:
        result.errors.append("tuition_students must be >= 0.")
    if gross < 0:
        result.errors.append("gross_tuition must be >= 0.")
    if result.errors:
        return result

    avg_rate = 0.0
    for category in discount_categories or []:
        if not isinstance(category, dict):
            continue
        name = str(category.get("name") or "Discount")
        mode = str(category.get("mode") or DISCOUNT_MODE_PERCENT)
        value = _optional_number(category.get("value"))
        ratio = _optional_number(category.get("ratio"))

        if value is None or value < 0:
            result.warnings.append(f'Discount "{name}" has invalid value; ignored.')
            continue
        if ratio is None or ratio < 0:
            result.warnings.append(f'Discount "{name}" has invalid ratio; ignored.')
            continue

        r = clamp(ratio, 0.0, 1.0)
        if mode == DISCOUNT_MODE_FIXED:
            part = (r * value) / avg_fee if avg_fee > 0 else 0.0
            amount = students * r * value
        else:
            part = r * clamp(value, 0.0, 1.0)
            amount = gross * part

        result.details.append(
            DiscountDetail(name=name, mode=mode, value=value, ratio=r, amount=amount, effective_rate_part=part)
        )
        avg_rate += part

    capped = clamp(avg_rate, 0.0, 1.0)
    result.avg_discount_rate = avg_rate
    result.total_discounts = min(gross * capped, gross)
    if avg_rate > 1:
        result.cap_applied = CapApplied(original_avg_rate=avg_rate, capped_avg_rate=capped)
        logger.info(f"Discount rate {avg_rate:.4f} exceeds 100%; capped at {capped:.2f}")
    return result
