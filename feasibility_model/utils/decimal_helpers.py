# feasibility_model/utils/decimal_helpers.py

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

from feasibility_model.utils.numeric import is_finite_number

# Standard quantization unit for money and ratios in the output payload
TWO_PLACES = Decimal('0.01')


def to_money(d: Decimal) -> Decimal:
    """Quantize Decimal to two places with ROUND_HALF_UP rounding."""
    return d.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def round2(value: Any) -> Optional[float]:
    """Round a float to two decimals for output; non-finite values become None."""
    if not is_finite_number(value):
        return None
    try:
        # adding 0.0 folds -0.0 into 0.0
        return float(to_money(Decimal(repr(float(value))))) + 0.0
    except InvalidOperation:
        return None
