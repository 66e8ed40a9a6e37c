from feasibility_model.config.models import EngineConfig
from feasibility_model.engines.run_one_year import run_one_year
from feasibility_model.projections.reporting import calculate_school_feasibility
from feasibility_model.projections.runner import FeasibilityResult, run_feasibility

__all__ = [
    'calculate_school_feasibility',
    'run_feasibility',
    'run_one_year',
    'FeasibilityResult',
    'EngineConfig',
]
