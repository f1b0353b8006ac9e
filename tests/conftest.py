"""
Shared pytest fixtures for the test suite.

Numba kernels compile on first use (and are cached on disk), so the
fixtures favour small grids; the reference 64x64 scene is session-scoped.
"""

import pytest
import numpy as np

from stable_fluids.grid.indexing import allocate_field, as_grid
from stable_fluids.grid.obstacle import obstacle_mask
from stable_fluids.solvers.fluid_solver import FluidSolver, SolverConfig


# =============================================================================
# Grid Fixtures
# =============================================================================

@pytest.fixture
def small_n():
    """Small interior resolution that still fits the obstacle."""
    return 16


@pytest.fixture
def random_field(small_n):
    """Flat random field over the padded grid."""
    rng = np.random.default_rng(42)
    return rng.standard_normal(allocate_field(small_n).size)


@pytest.fixture
def fluid_cells(small_n):
    """Boolean [i, j] mask of interior cells outside the obstacle."""
    mask = ~obstacle_mask(small_n)
    mask[0, :] = mask[-1, :] = False
    mask[:, 0] = mask[:, -1] = False
    return mask


def gaussian_gradient_velocity(n, sigma=3.0):
    """
    Velocity (u, v) = grad(phi) of a centred Gaussian bump, flat buffers.

    Purely divergent and negligible near the domain edges.
    """
    u = allocate_field(n)
    v = allocate_field(n)
    c = 0.5 * (n + 1)
    i, j = np.meshgrid(np.arange(n + 2), np.arange(n + 2), indexing='ij')
    phi = np.exp(-((i - c)**2 + (j - c)**2) / (2.0 * sigma**2))
    as_grid(u, n)[:, :] = -(i - c) / sigma**2 * phi
    as_grid(v, n)[:, :] = -(j - c) / sigma**2 * phi
    return u, v


@pytest.fixture
def gaussian_velocity():
    """Gradient-of-Gaussian velocity on a 32x32 grid."""
    n = 32
    u, v = gaussian_gradient_velocity(n)
    return n, u, v


# =============================================================================
# Solver Fixtures
# =============================================================================

@pytest.fixture
def small_solver(small_n):
    """Fresh 16x16 solver with the obstacle enabled."""
    return FluidSolver(SolverConfig(resolution=small_n))


@pytest.fixture(scope="session")
def reference_config():
    """The 64x64 reference scene parameters."""
    return SolverConfig(
        resolution=64,
        diffusion_iterations=4,
        projection_iterations=10,
        diffusion_rate=0.0001,
        dt=1.0 / (8 * 30.0),
    )
