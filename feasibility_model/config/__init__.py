from .models import CohortBand, EngineConfig, NormYearConfig
from .loaders import ConfigLoadError, load_engine_config, load_norm_config, load_yaml_config

__all__ = [
    "CohortBand",
    "EngineConfig",
    "NormYearConfig",
    "ConfigLoadError",
    "load_engine_config",
    "load_norm_config",
    "load_yaml_config",
]
