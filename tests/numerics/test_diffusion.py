"""
Tests for the Gauss-Seidel diffusion solver.

Validates:
1. Agreement with a plain-Python in-place relaxation (sweep order matters)
2. Zero rate reproduces the source field
3. Obstacle cells are skipped (only the plate faces are refilled)
4. Diffusion smooths a spike
"""

import pytest
import numpy as np
from numpy.testing import assert_allclose

from stable_fluids.constants import BoundaryKind
from stable_fluids.grid.indexing import allocate_field, as_grid, index
from stable_fluids.grid.obstacle import (
    ObstacleBox,
    is_obstacle,
    obstacle_core_mask,
    obstacle_mask,
)
from stable_fluids.numerics.boundary import set_boundary
from stable_fluids.numerics.diffusion import diffuse


def reference_diffuse(x, x0, kind, rate, dt, n, iterations, obstacle):
    """Straightforward Python version of the in-place relaxation."""
    a = dt * rate * n * n
    for _ in range(iterations):
        for i in range(1, n + 1):
            for j in range(1, n + 1):
                if obstacle and is_obstacle(i, j, n):
                    continue
                x[index(i, j, n)] = (
                    x0[index(i, j, n)]
                    + a * (x[index(i - 1, j, n)] + x[index(i + 1, j, n)]
                           + x[index(i, j - 1, n)] + x[index(i, j + 1, n)])
                ) / (1.0 + 4.0 * a)
        set_boundary(x, kind, n, obstacle)


class TestDiffusion:

    @pytest.mark.parametrize("kind", [BoundaryKind.CONTINUOUS, BoundaryKind.HORIZONTAL_WALL])
    @pytest.mark.parametrize("obstacle", [True, False])
    def test_matches_reference_relaxation(self, small_n, kind, obstacle):
        n = small_n
        rng = np.random.default_rng(0)
        x0 = rng.random(allocate_field(n).size)
        x = rng.random(x0.size)
        x_ref = x.copy()

        # Large rate so neighbour coupling (and sweep order) dominates
        diffuse(x, x0, kind, rate=0.5, dt=0.1, n=n, iterations=4, obstacle=obstacle)
        reference_diffuse(x_ref, x0, kind, 0.5, 0.1, n, 4, obstacle)

        assert_allclose(x, x_ref, rtol=1e-12, atol=1e-14)

    def test_zero_rate_copies_source(self, small_n):
        n = small_n
        rng = np.random.default_rng(1)
        x0 = rng.random(allocate_field(n).size)
        x = np.zeros_like(x0)

        diffuse(x, x0, BoundaryKind.CONTINUOUS, rate=0.0, dt=0.1, n=n)

        fluid = ~obstacle_mask(n)
        fluid[0, :] = fluid[-1, :] = fluid[:, 0] = fluid[:, -1] = False

        assert_allclose(as_grid(x, n)[fluid], as_grid(x0, n)[fluid])

    def test_obstacle_cells_skipped(self, small_n):
        """Only the boundary applier writes plate cells, and only on its faces."""
        n = small_n
        x0 = np.ones(allocate_field(n).size)
        x = allocate_field(n)
        as_grid(x, n)[obstacle_mask(n)] = -3.0

        diffuse(x, x0, BoundaryKind.CONTINUOUS, rate=1e-3, dt=0.05, n=n)

        grid = as_grid(x, n)
        assert np.all(grid[obstacle_core_mask(n)] == -3.0)
        box = ObstacleBox.from_resolution(n)
        for j in range(box.j_min + 1, box.j_max):
            assert grid[box.i_min, j] == grid[box.i_min - 1, j]

    def test_uniform_fluid_preserved(self, small_n, fluid_cells):
        """The plate neither absorbs nor emits a scalar with zero gradient."""
        n = small_n
        x0 = allocate_field(n)
        as_grid(x0, n)[fluid_cells] = 1.0
        set_boundary(x0, BoundaryKind.CONTINUOUS, n)
        x = x0.copy()

        diffuse(x, x0, BoundaryKind.CONTINUOUS, rate=0.5, dt=0.1, n=n)

        assert_allclose(as_grid(x, n)[fluid_cells], 1.0, rtol=1e-14)

    def test_spike_spreads(self):
        n = 16
        x0 = allocate_field(n)
        x0[index(4, 4, n)] = 1.0
        x = allocate_field(n)

        diffuse(x, x0, BoundaryKind.CONTINUOUS, rate=0.01, dt=0.1, n=n,
                iterations=20, obstacle=False)

        assert x[index(4, 4, n)] < 1.0
        assert x[index(5, 4, n)] > 0.0
        assert x[index(4, 5, n)] > 0.0
        # Implicit diffusion stays bounded and non-negative
        assert x.min() >= 0.0
        assert x.max() <= 1.0

    def test_zero_field_stays_zero(self, small_n):
        n = small_n
        x0 = allocate_field(n)
        x = allocate_field(n)
        diffuse(x, x0, BoundaryKind.VERTICAL_WALL, rate=1e-4, dt=1 / 240, n=n)
        assert not x.any()
