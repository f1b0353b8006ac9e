"""
Stable Fluids solver for 2D incompressible flow on a fixed square grid.

State: density d and velocity (u, v), each with a current and a previous
buffer over the (N+2)² halo-padded grid.

One tick:
    velocity step:  add sources → swap → diffuse → project → swap
                    → self-advect → project
    density step:   add source → swap → diffuse → swap → advect

References:
    - Stam (1999). Stable Fluids. SIGGRAPH.
    - Stam (2003). Real-Time Fluid Dynamics for Games. GDC.
"""

import numpy as np
import numpy.typing as npt
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, Optional, Tuple, Union
from loguru import logger

from ..constants import (
    DEFAULT_RESOLUTION,
    DEFAULT_DIFFUSION_RATE,
    DEFAULT_DT,
    DIFFUSION_ITERATIONS,
    PROJECTION_ITERATIONS,
)
from ..grid.indexing import allocate_field, as_grid
from ..grid.obstacle import MIN_OBSTACLE_RESOLUTION
from ..numerics.boundary import FIELD_BOUNDARY
from ..numerics.sources import add_source
from ..numerics.diffusion import diffuse
from ..numerics.advection import advect
from ..numerics.projection import project

NDArrayFloat = npt.NDArray[np.floating]


class ConfigurationError(ValueError):
    """Raised when solver parameters are rejected before allocation."""
    pass


def _is_int(value) -> bool:
    return isinstance(value, Integral) and not isinstance(value, bool)


@dataclass
class SolverConfig:
    """Configuration for the Stable Fluids solver."""

    resolution: int = DEFAULT_RESOLUTION
    diffusion_iterations: int = DIFFUSION_ITERATIONS
    projection_iterations: int = PROJECTION_ITERATIONS
    diffusion_rate: float = DEFAULT_DIFFUSION_RATE
    dt: float = DEFAULT_DT
    viscosity: Optional[float] = None  # None: velocity diffuses at diffusion_rate
    obstacle: bool = True

    @property
    def effective_viscosity(self) -> float:
        return self.diffusion_rate if self.viscosity is None else self.viscosity

    def validate(self) -> None:
        """
        Reject invalid parameters.

        Raises
        ------
        ConfigurationError
            On non-positive resolution or iteration counts, non-positive dt,
            negative diffusion rate or viscosity, or an obstacle that does
            not fit the grid.
        """
        if not _is_int(self.resolution) or self.resolution <= 0:
            raise ConfigurationError(
                f"resolution must be a positive integer, got {self.resolution!r}"
            )
        for name in ('diffusion_iterations', 'projection_iterations'):
            value = getattr(self, name)
            if not _is_int(value) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if not self.dt > 0.0:
            raise ConfigurationError(f"dt must be positive, got {self.dt!r}")
        if not self.diffusion_rate >= 0.0:
            raise ConfigurationError(
                f"diffusion_rate must be non-negative, got {self.diffusion_rate!r}"
            )
        if self.viscosity is not None and not self.viscosity >= 0.0:
            raise ConfigurationError(f"viscosity must be non-negative, got {self.viscosity!r}")
        if self.obstacle and self.resolution < MIN_OBSTACLE_RESOLUTION:
            raise ConfigurationError(
                f"resolution {self.resolution} is too small for the obstacle "
                f"(minimum {MIN_OBSTACLE_RESOLUTION}); disable it with obstacle=False"
            )


class FluidSolver:
    """
    Simulation context owning every field buffer of one scene.

    Kernels receive whichever buffers the step functions hand them; only
    this class decides which buffer is "current" and which is "previous".
    """

    def __init__(self, config: Optional[Union[SolverConfig, Dict]] = None):
        """Validate the configuration, then allocate zeroed buffers."""
        if config is None:
            self.config = SolverConfig()
        elif isinstance(config, dict):
            try:
                self.config = SolverConfig(**config)
            except TypeError as e:
                raise ConfigurationError(f"Invalid solver configuration: {e}") from e
        else:
            self.config = config

        self.config.validate()

        n = self.N = self.config.resolution
        self.obstacle = self.config.obstacle

        self.density = allocate_field(n)
        self.density_prev = allocate_field(n)
        self.u = allocate_field(n)
        self.u_prev = allocate_field(n)
        self.v = allocate_field(n)
        self.v_prev = allocate_field(n)

        self.density_source = allocate_field(n)
        self.u_source = allocate_field(n)
        self.v_source = allocate_field(n)

        self.tick_count = 0
        self.time = 0.0

        logger.info(f"{'='*60}")
        logger.info("Stable Fluids Solver Initialized")
        logger.info(f"{'='*60}")
        logger.info(f"Grid size: {n} x {n} cells (+1 halo)")
        logger.info(f"Obstacle: {'enabled' if self.obstacle else 'disabled'}")
        logger.info(f"Timestep: {self.config.dt:.6f}")
        logger.info(f"Diffusion rate: {self.config.diffusion_rate:.2e}, "
                    f"viscosity: {self.config.effective_viscosity:.2e}")
        logger.info(f"Gauss-Seidel sweeps: diffusion {self.config.diffusion_iterations}, "
                    f"projection {self.config.projection_iterations}")
        logger.info(f"{'='*60}")

    @classmethod
    def configure(cls, resolution: int,
                  diffusion_iterations: int = DIFFUSION_ITERATIONS,
                  projection_iterations: int = PROJECTION_ITERATIONS,
                  diffusion_rate: float = DEFAULT_DIFFUSION_RATE,
                  dt: float = DEFAULT_DT,
                  *, viscosity: Optional[float] = None,
                  obstacle: bool = True) -> 'FluidSolver':
        """One-time setup; raises ConfigurationError before allocating anything."""
        return cls(SolverConfig(
            resolution=resolution,
            diffusion_iterations=diffusion_iterations,
            projection_iterations=projection_iterations,
            diffusion_rate=diffusion_rate,
            dt=dt,
            viscosity=viscosity,
            obstacle=obstacle,
        ))

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def _copy_source(self, target: NDArrayFloat, values, name: str) -> None:
        values = np.asarray(values, dtype=np.float64)
        if values.shape == target.shape:
            target[:] = values
        elif values.shape == (self.N + 2, self.N + 2):
            as_grid(target, self.N)[:, :] = values
        else:
            raise ValueError(
                f"{name} source has shape {values.shape}; expected {target.shape} "
                f"(flat) or {(self.N + 2, self.N + 2)} (indexed [i, j])"
            )

    def set_sources(self, density=None, u=None, v=None) -> None:
        """
        Set per-cell injection rates for the upcoming tick.

        Each argument is either a flat ((N+2)²,) array or a 2-D (N+2, N+2)
        array indexed [i, j]. None leaves that source unchanged.
        """
        if density is not None:
            self._copy_source(self.density_source, density, 'density')
        if u is not None:
            self._copy_source(self.u_source, u, 'u')
        if v is not None:
            self._copy_source(self.v_source, v, 'v')

    def clear_sources(self) -> None:
        self.density_source.fill(0.0)
        self.u_source.fill(0.0)
        self.v_source.fill(0.0)

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def velocity_step(self) -> None:
        cfg = self.config
        n = self.N
        nu = cfg.effective_viscosity
        u_kind = FIELD_BOUNDARY['u']
        v_kind = FIELD_BOUNDARY['v']

        add_source(self.u, self.u_source, cfg.dt)
        add_source(self.v, self.v_source, cfg.dt)

        self.u, self.u_prev = self.u_prev, self.u
        self.v, self.v_prev = self.v_prev, self.v
        diffuse(self.u, self.u_prev, u_kind, nu, cfg.dt, n,
                cfg.diffusion_iterations, self.obstacle)
        diffuse(self.v, self.v_prev, v_kind, nu, cfg.dt, n,
                cfg.diffusion_iterations, self.obstacle)

        # Previous buffers are free again: use them as pressure/divergence scratch
        project(self.u, self.v, self.u_prev, self.v_prev, n,
                cfg.projection_iterations, self.obstacle)

        self.u, self.u_prev = self.u_prev, self.u
        self.v, self.v_prev = self.v_prev, self.v
        advect(self.u, self.u_prev, self.u_prev, self.v_prev, u_kind, cfg.dt, n, self.obstacle)
        advect(self.v, self.v_prev, self.u_prev, self.v_prev, v_kind, cfg.dt, n, self.obstacle)

        project(self.u, self.v, self.u_prev, self.v_prev, n,
                cfg.projection_iterations, self.obstacle)

    def density_step(self) -> None:
        cfg = self.config
        n = self.N
        kind = FIELD_BOUNDARY['density']

        add_source(self.density, self.density_source, cfg.dt)

        self.density, self.density_prev = self.density_prev, self.density
        diffuse(self.density, self.density_prev, kind, cfg.diffusion_rate, cfg.dt, n,
                cfg.diffusion_iterations, self.obstacle)

        self.density, self.density_prev = self.density_prev, self.density
        advect(self.density, self.density_prev, self.u, self.v, kind, cfg.dt, n, self.obstacle)

    def tick(self) -> None:
        """Advance the velocity step, then the density step, exactly once."""
        self.velocity_step()
        self.density_step()
        self.tick_count += 1
        self.time += self.config.dt
        logger.debug(f"tick {self.tick_count}: t = {self.time:.5f}")

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def _readonly_view(self, field: NDArrayFloat) -> NDArrayFloat:
        view = as_grid(field, self.N)
        view.flags.writeable = False
        return view

    def read_density(self) -> NDArrayFloat:
        """Read-only (N+2, N+2) view of the current density, indexed [i, j]."""
        return self._readonly_view(self.density)

    def read_velocity(self) -> Tuple[NDArrayFloat, NDArrayFloat]:
        """Read-only (u, v) views of the current velocity, indexed [i, j]."""
        return self._readonly_view(self.u), self._readonly_view(self.v)
