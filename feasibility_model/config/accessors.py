# feasibility_model/config/accessors.py
"""
Helper functions to resolve the effective settings for a run, merging the
scenario's own overrides (cohort bands, norm config per year) over the
EngineConfig defaults.
"""

import logging
from typing import Any, Dict, Optional

from feasibility_model.config.models import CohortBand, EngineConfig, NormYearConfig
from feasibility_model.state.schema import BAND_KEYS, YEAR_1
from feasibility_model.utils.numeric import as_dict, to_number

logger = logging.getLogger(__name__)


def resolve_cohort_bands(
    band_input: Any, config: EngineConfig
) -> Dict[str, CohortBand]:
    """
    Overlay a scenario's cohort-band section on the configured defaults.

    A band is enabled unless the scenario sets ``enabled: false`` explicitly.
    Bounds are compared as strings so YAML integers (``from: 1``) still match.
    Unknown bounds are kept as-is; the aggregator treats such a band as empty.
    """
    bands_in = as_dict(band_input)
    resolved: Dict[str, CohortBand] = {}
    for band in BAND_KEYS:
        default = config.cohort_bands[band]
        row = as_dict(bands_in.get(band))
        lo = row.get("from")
        hi = row.get("to")
        resolved[band] = CohortBand(
            enabled=row.get("enabled") is not False,
            from_grade=str(default.from_grade if lo is None else lo),
            to_grade=str(default.to_grade if hi is None else hi),
        )
    return resolved


def _looks_like_curriculum(obj: Any, config: EngineConfig) -> bool:
    if not isinstance(obj, dict):
        return False
    keys = {str(k) for k in obj}
    return any(g in keys for g in config.grade_keys)


def _normalize_curriculum(table: Dict[Any, Any]) -> Dict[str, Dict[str, Any]]:
    # Grade and subject keys may come through YAML as ints; scalar entries are year settings, not grades.
    return {
        str(grade): {str(subject): hours for subject, hours in subjects.items()}
        for grade, subjects in table.items()
        if isinstance(subjects, dict)
    }


def _positive(value: Any) -> Optional[float]:
    number = to_number(value)
    return number if number is not None and number > 0 else None


def resolve_norm_year_config(
    norm_config: Any, year_key: str, config: EngineConfig
) -> NormYearConfig:
    """
    Resolve the norm settings used for one projection year.

    ``norm_config`` is either a flat ``{teacher_weekly_max_hours,
    curriculum_weekly_hours}`` mapping or carries a ``years`` mapping keyed by
    year. A year missing from ``years`` falls back to ``y1``; an empty year
    mapping does not.

    Max hours: year value -> base value -> ``config.default_teacher_weekly_max_hours``.
    Curriculum: year ``curriculum_weekly_hours`` -> the year mapping itself when it
    looks like a curriculum table -> base ``curriculum_weekly_hours`` -> empty.
    """
    base = as_dict(norm_config)
    years = base.get("years") if isinstance(base.get("years"), dict) else None
    if years is not None:
        entry = years.get(year_key)
        # An empty mapping is an explicit year entry; its settings fall through to the base.
        if not entry and not isinstance(entry, dict):
            entry = years.get(YEAR_1)
        source = as_dict(entry)
    else:
        source = base

    max_hours = (
        _positive(source.get("teacher_weekly_max_hours"))
        or _positive(base.get("teacher_weekly_max_hours"))
        or config.default_teacher_weekly_max_hours
    )

    if isinstance(source.get("curriculum_weekly_hours"), dict):
        curriculum = source["curriculum_weekly_hours"]
    elif _looks_like_curriculum(source, config):
        curriculum = source
    elif isinstance(base.get("curriculum_weekly_hours"), dict):
        curriculum = base["curriculum_weekly_hours"]
    else:
        curriculum = {}

    resolved = NormYearConfig(
        teacher_weekly_max_hours=max_hours,
        curriculum_weekly_hours=_normalize_curriculum(curriculum),
    )
    logger.debug(
        f"[NORM {year_key}] max_hours={resolved.teacher_weekly_max_hours} "
        f"grades_with_curriculum={len(resolved.curriculum_weekly_hours)}"
    )
    return resolved
