"""
Configuration module for the Stable Fluids simulation.

Provides YAML-based configuration with dataclass schema.
"""

from .schema import (
    SimulationConfig,
    GridConfig,
    SolverSettings,
    EmitterConfig,
    OutputConfig,
    coarse_preset,
    default_preset,
    fine_preset,
)

from .loader import (
    load_yaml,
    from_dict,
    apply_cli_overrides,
    save_yaml,
)

__all__ = [
    # Schema classes
    'SimulationConfig',
    'GridConfig',
    'SolverSettings',
    'EmitterConfig',
    'OutputConfig',
    # Presets
    'coarse_preset',
    'default_preset',
    'fine_preset',
    # Loader functions
    'load_yaml',
    'from_dict',
    'apply_cli_overrides',
    'save_yaml',
]
