"""
Pressure projection (Helmholtz decomposition) of the velocity field.

Steps:
    1. p = 0, div = 0
    2. div = -0.5·h·(u[i+1,j] - u[i-1,j] + v[i,j+1] - v[i,j-1]),  h = 1/N
    3. Gauss-Seidel on  4·p[i,j] - Σ p[neighbours] = div
    4. u -= 0.5·(p[i+1,j] - p[i-1,j]) / h
       v -= 0.5·(p[i,j+1] - p[i,j-1]) / h

The Poisson solve uses a fixed small number of sweeps, so the result is
only approximately divergence free.
"""

import numpy as np
import numpy.typing as npt
from numba import njit

from ..constants import (
    PROJECTION_ITERATIONS,
    PRESSURE_BOUNDARY,
    DIVERGENCE_BOUNDARY,
    U_BOUNDARY,
    V_BOUNDARY,
)
from ..grid.indexing import index
from ..grid.obstacle import is_obstacle
from .boundary import set_boundary_numba

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True)
def compute_divergence_numba(u: np.ndarray, v: np.ndarray, div: np.ndarray,
                             n: int, obstacle: bool) -> None:
    """Central-difference divergence (scaled by -0.5·h) on fluid cells."""
    h = 1.0 / n
    stride = n + 2
    for i in range(1, n + 1):
        for j in range(1, n + 1):
            if obstacle and is_obstacle(i, j, n):
                continue
            k = index(i, j, n)
            div[k] = -0.5 * h * ((u[k + 1] - u[k - 1])
                                 + (v[k + stride] - v[k - stride]))


@njit(cache=True)
def project_numba(u: np.ndarray, v: np.ndarray, p: np.ndarray, div: np.ndarray,
                  n: int, iterations: int, obstacle: bool) -> None:
    h = 1.0 / n
    stride = n + 2

    # Plate cells of the scratch buffers are never computed, so clear both
    for k in range(p.size):
        p[k] = 0.0
        div[k] = 0.0

    compute_divergence_numba(u, v, div, n, obstacle)
    set_boundary_numba(div, DIVERGENCE_BOUNDARY, n, obstacle)

    for _ in range(iterations):
        for i in range(1, n + 1):
            for j in range(1, n + 1):
                if obstacle and is_obstacle(i, j, n):
                    continue
                k = index(i, j, n)
                p[k] = (div[k] + p[k - 1] + p[k + 1]
                        + p[k - stride] + p[k + stride]) / 4.0
        set_boundary_numba(p, PRESSURE_BOUNDARY, n, obstacle)

    for i in range(1, n + 1):
        for j in range(1, n + 1):
            if obstacle and is_obstacle(i, j, n):
                continue
            k = index(i, j, n)
            u[k] -= 0.5 * (p[k + 1] - p[k - 1]) / h
            v[k] -= 0.5 * (p[k + stride] - p[k - stride]) / h

    set_boundary_numba(u, U_BOUNDARY, n, obstacle)
    set_boundary_numba(v, V_BOUNDARY, n, obstacle)


def project(u: NDArrayFloat, v: NDArrayFloat, p: NDArrayFloat, div: NDArrayFloat,
            n: int, iterations: int = PROJECTION_ITERATIONS,
            obstacle: bool = True) -> None:
    """
    Remove the gradient part of (u, v) in place.

    Parameters
    ----------
    u, v : ndarray
        Velocity components, updated in place.
    p, div : ndarray
        Scratch buffers for pressure and divergence; both are overwritten.
    n : int
        Interior resolution.
    iterations : int
        Gauss-Seidel sweeps for the pressure Poisson equation.
    obstacle : bool
        Exclude (and reflect around) the plate.
    """
    project_numba(u, v, p, div, n, iterations, obstacle)
