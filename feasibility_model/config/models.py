# feasibility_model/config/models.py
"""
Pydantic models for the engine's explicit configuration.

The scenario document itself is deliberately *not* modelled here: it is read
tolerantly by the engines so that malformed input ends up in the result's
error/warning flags instead of raising. These models cover the parameters the
engine is run *with* (grade keys, default cohort bands, thresholds) and the
resolved per-year norm settings.
"""

import logging
from typing import Any, Dict, List

from pydantic import BaseModel, Field, model_validator

from feasibility_model.state.schema import (
    BAND_KEYS,
    DEFAULT_BAND_RANGES,
    DEFAULT_GRADE_KEYS,
    DEFAULT_TEACHER_WEEKLY_MAX_HOURS,
)

logger = logging.getLogger(__name__)


class CohortBand(BaseModel):
    """An inclusive, order-independent range of grades."""

    enabled: bool = True
    from_grade: str
    to_grade: str


def _default_bands() -> Dict[str, CohortBand]:
    return {
        band: CohortBand(from_grade=lo, to_grade=hi)
        for band, (lo, hi) in DEFAULT_BAND_RANGES.items()
    }


class EngineConfig(BaseModel):
    """Defaults and thresholds passed into every feasibility run."""

    grade_keys: List[str] = Field(default_factory=lambda: list(DEFAULT_GRADE_KEYS))
    cohort_bands: Dict[str, CohortBand] = Field(default_factory=_default_bands)
    default_teacher_weekly_max_hours: float = Field(
        DEFAULT_TEACHER_WEEKLY_MAX_HOURS,
        gt=0.0,
        description="Used when neither the year nor the base norm config sets a positive value",
    )
    inflation_rate_floor: float = Field(-0.99, gt=-1.0)
    inflation_rate_ceiling: float = 10.0
    low_utilization_threshold: float = Field(0.60, ge=0.0)
    high_utilization_threshold: float = Field(0.95, ge=0.0)
    high_discount_ratio_threshold: float = Field(0.30, ge=0.0)

    @model_validator(mode='after')
    def validate_engine_config(self) -> 'EngineConfig':
        """Run all validations for EngineConfig."""
        self._check_grade_keys()
        self._check_bands()
        self._check_thresholds()
        return self

    def _check_grade_keys(self) -> None:
        if not self.grade_keys:
            raise ValueError("grade_keys must not be empty")
        if len(set(self.grade_keys)) != len(self.grade_keys):
            raise ValueError(f"grade_keys must be unique, got {self.grade_keys}")

    def _check_bands(self) -> None:
        missing = [band for band in BAND_KEYS if band not in self.cohort_bands]
        if missing:
            raise ValueError(f"cohort_bands is missing bands: {missing}")
        unknown = [band for band in self.cohort_bands if band not in BAND_KEYS]
        if unknown:
            logger.warning(f"cohort_bands defines unknown bands {unknown}; they are ignored.")
        for band in BAND_KEYS:
            cfg = self.cohort_bands[band]
            for grade in (cfg.from_grade, cfg.to_grade):
                if grade not in self.grade_keys:
                    raise ValueError(f"Band '{band}' refers to unknown grade '{grade}'")

    def _check_thresholds(self) -> None:
        if self.inflation_rate_floor >= self.inflation_rate_ceiling:
            raise ValueError("inflation_rate_floor must be below inflation_rate_ceiling")
        if self.low_utilization_threshold > self.high_utilization_threshold:
            raise ValueError("low_utilization_threshold cannot exceed high_utilization_threshold")


class NormYearConfig(BaseModel):
    """Norm settings resolved for one projection year."""

    teacher_weekly_max_hours: float = Field(DEFAULT_TEACHER_WEEKLY_MAX_HOURS, gt=0.0)
    curriculum_weekly_hours: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
