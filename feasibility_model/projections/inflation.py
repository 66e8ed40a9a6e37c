# feasibility_model/projections/inflation.py
"""
Inflation rates and cumulative price factors for the three projection years.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict

from feasibility_model.config.models import EngineConfig
from feasibility_model.state.schema import YEAR_1, YEAR_2, YEAR_3
from feasibility_model.utils.numeric import as_dict, clamp, safe_num

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InflationFactors:
    rate_y2: float
    rate_y3: float

    @property
    def factors(self) -> Dict[str, float]:
        y2 = 1.0 + self.rate_y2
        return {YEAR_1: 1.0, YEAR_2: y2, YEAR_3: y2 * (1.0 + self.rate_y3)}

    @property
    def rates(self) -> Dict[str, float]:
        return {YEAR_2: self.rate_y2, YEAR_3: self.rate_y3}

    def factor(self, year_key: str) -> float:
        return self.factors.get(year_key, 1.0)


def _read_rate(basics: Dict[str, Any], year_key: str) -> float:
    nested = as_dict(basics.get("inflation"))
    raw = nested.get(year_key)
    if raw is None:
        raw = basics.get(f"inflation_{year_key}")
    return safe_num(raw)


def get_inflation_factors(scenario: Any, config: EngineConfig) -> InflationFactors:
    """
    Read the year-2/year-3 inflation rates from ``basics`` and clamp them.

    Rates come from ``basics.inflation.{y2,y3}`` with ``basics.inflation_y2`` /
    ``basics.inflation_y3`` accepted as a flat fallback.
    """
    basics = as_dict(as_dict(scenario).get("basics"))
    lo, hi = config.inflation_rate_floor, config.inflation_rate_ceiling
    inflation = InflationFactors(
        rate_y2=clamp(_read_rate(basics, YEAR_2), lo, hi),
        rate_y3=clamp(_read_rate(basics, YEAR_3), lo, hi),
    )
    logger.info(f"Inflation rates {inflation.rates} -> factors {inflation.factors}")
    return inflation
