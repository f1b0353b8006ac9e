"""
Configuration schema for the Stable Fluids simulation.

Dataclass-based configuration that can be loaded from YAML or constructed programmatically.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List


@dataclass
class GridConfig:
    """Grid configuration."""

    resolution: int = 64       # Interior cells per direction
    obstacle: bool = True      # Thin plate for vortex shedding


@dataclass
class SolverSettings:
    """Solver iteration and timestep settings."""

    diffusion_iterations: int = 4     # Gauss-Seidel sweeps per diffusion solve
    projection_iterations: int = 10   # Gauss-Seidel sweeps per pressure solve
    diffusion_rate: float = 1.0e-4
    viscosity: Optional[float] = None  # None: same as diffusion_rate
    substeps: int = 8                  # Ticks per frame
    frame_rate: float = 30.0           # Target frames per second

    @property
    def dt(self) -> float:
        """Timestep: one frame split evenly into substeps."""
        return 1.0 / (self.substeps * self.frame_rate)


@dataclass
class EmitterConfig:
    """Single-cell source configuration."""

    # [i, j]; null places the emitter at (N/8, N/2)
    position: Optional[List[int]] = None
    density_rate: float = 4000.0
    u_rate: float = 500.0
    v_rate: float = 0.0


@dataclass
class OutputConfig:
    """Output configuration."""

    directory: str = "output/vortex_street"
    case_name: str = "vortex_street"
    n_frames: int = 180
    report_freq: int = 20      # Frames between timing reports
    snapshot_freq: int = 0     # Frames between .npz snapshots (0 = final only)


@dataclass
class SimulationConfig:
    """Complete simulation configuration."""

    grid: GridConfig = field(default_factory=GridConfig)
    solver: SolverSettings = field(default_factory=SolverSettings)
    emitter: EmitterConfig = field(default_factory=EmitterConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def to_solver_config(self):
        """Convert to the flat SolverConfig consumed by FluidSolver."""
        from stable_fluids.solvers.fluid_solver import SolverConfig

        return SolverConfig(
            resolution=self.grid.resolution,
            diffusion_iterations=self.solver.diffusion_iterations,
            projection_iterations=self.solver.projection_iterations,
            diffusion_rate=self.solver.diffusion_rate,
            dt=self.solver.dt,
            viscosity=self.solver.viscosity,
            obstacle=self.grid.obstacle,
        )

    def to_emitter(self):
        """Build the Emitter described by this configuration."""
        from stable_fluids.solvers.emitter import Emitter

        position = self.emitter.position
        return Emitter(
            position=tuple(position) if position is not None else None,
            density_rate=self.emitter.density_rate,
            u_rate=self.emitter.u_rate,
            v_rate=self.emitter.v_rate,
        )

    def to_dict(self) -> dict:
        """Convert to nested dictionary."""
        return asdict(self)


# Preset configurations
def coarse_preset() -> GridConfig:
    """Coarse grid for fast testing."""
    return GridConfig(resolution=32)


def default_preset() -> GridConfig:
    """Reference 64x64 scene."""
    return GridConfig(resolution=64)


def fine_preset() -> GridConfig:
    """Fine grid for a sharper vortex street."""
    return GridConfig(resolution=128)
