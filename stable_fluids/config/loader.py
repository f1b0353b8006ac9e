"""
YAML configuration loader with validation.
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Union, get_args
from dataclasses import fields, is_dataclass

from .schema import (
    SimulationConfig, GridConfig, SolverSettings, EmitterConfig, OutputConfig,
    coarse_preset, default_preset, fine_preset,
)


_PRESETS = {
    'coarse': coarse_preset,
    'default': default_preset,
    'fine': fine_preset,
}

_SECTIONS = {
    'grid': GridConfig,
    'solver': SolverSettings,
    'emitter': EmitterConfig,
    'output': OutputConfig,
}


def _merge_dict(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def _coerce_type(value, field_type):
    """Coerce value to the expected field type."""
    # Optional[float] and friends: coerce to the non-None member
    args = [a for a in get_args(field_type) if a is not type(None)]
    if len(args) == 1:
        field_type = args[0]

    # Handle string representations of numbers (e.g., "1e-4")
    if field_type == float and isinstance(value, (str, int)) and not isinstance(value, bool):
        try:
            return float(value)
        except ValueError:
            return value
    if field_type == int and isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return value
    return value


def _dict_to_dataclass(cls, data: dict):
    """Convert a dictionary to a dataclass instance."""
    if not is_dataclass(cls):
        return data

    field_types = {f.name: f.type for f in fields(cls)}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            continue  # Skip unknown fields
        kwargs[key] = _coerce_type(value, field_types[key])

    return cls(**kwargs)


def load_yaml(path: Union[str, Path]) -> SimulationConfig:
    """
    Load simulation configuration from a YAML file.

    Args:
        path: Path to YAML configuration file

    Returns:
        SimulationConfig instance

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML is invalid
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}

    return from_dict(data)


def from_dict(data: Dict[str, Any]) -> SimulationConfig:
    """
    Create SimulationConfig from a dictionary.

    Handles nested sections and applies defaults for missing values.
    A top-level ``preset`` key ('coarse', 'default', 'fine') seeds the grid
    section; explicit grid values still win.
    """
    data = dict(data)

    preset = data.pop('preset', None)
    if preset:
        if preset not in _PRESETS:
            raise ValueError(f"Unknown preset: {preset!r}. Expected one of {sorted(_PRESETS)}")
        grid_preset = _PRESETS[preset]()
        preset_dict = {f.name: getattr(grid_preset, f.name) for f in fields(GridConfig)}
        data['grid'] = _merge_dict(preset_dict, data.get('grid') or {})

    config_dict = {}
    for section, cls in _SECTIONS.items():
        if data.get(section):
            config_dict[section] = _dict_to_dataclass(cls, data[section])

    return SimulationConfig(**config_dict)


def apply_cli_overrides(config: SimulationConfig, args) -> SimulationConfig:
    """
    Apply command-line argument overrides to a configuration.

    Only overrides values that were explicitly set (not None).

    Args:
        config: Base configuration
        args: argparse.Namespace with CLI arguments

    Returns:
        Updated SimulationConfig
    """
    config_dict = config.to_dict()

    # Map CLI args to config paths
    cli_mapping = {
        # Grid
        'resolution': ('grid', 'resolution'),

        # Solver
        'diffusion_rate': ('solver', 'diffusion_rate'),
        'viscosity': ('solver', 'viscosity'),
        'substeps': ('solver', 'substeps'),
        'diffusion_iterations': ('solver', 'diffusion_iterations'),
        'projection_iterations': ('solver', 'projection_iterations'),

        # Output
        'n_frames': ('output', 'n_frames'),
        'output_dir': ('output', 'directory'),
        'case_name': ('output', 'case_name'),
        'snapshot_freq': ('output', 'snapshot_freq'),
        'report_freq': ('output', 'report_freq'),
    }

    for cli_name, config_path in cli_mapping.items():
        value = getattr(args, cli_name, None)
        if value is not None:
            target = config_dict
            for key in config_path[:-1]:
                target = target[key]
            target[config_path[-1]] = value

    if getattr(args, 'no_obstacle', False):
        config_dict['grid']['obstacle'] = False

    return from_dict(config_dict)


def save_yaml(config: SimulationConfig, path: Union[str, Path]) -> None:
    """Save configuration to a YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
