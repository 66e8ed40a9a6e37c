import math
from decimal import Decimal

from feasibility_model.utils.decimal_helpers import round2, to_money


def test_to_money_rounds_half_up():
    assert to_money(Decimal("2.345")) == Decimal("2.35")
    assert to_money(Decimal("-2.345")) == Decimal("-2.35")


def test_round2_uses_decimal_representation():
    assert round2(2.675) == 2.68
    assert round2(1.005) == 1.01
    assert round2(10) == 10.0


def test_round2_folds_negative_zero():
    value = round2(-0.001)
    assert value == 0.0
    assert math.copysign(1.0, value) == 1.0


def test_round2_non_finite_values():
    assert round2(None) is None
    assert round2(math.nan) is None
    assert round2(math.inf) is None
    assert round2("3.14") is None
