"""
Implicit diffusion by fixed-count Gauss-Seidel relaxation.

Backward-Euler diffusion of x0 over one step:

    (1 + 4a)·x[i,j] - a·(x[i-1,j] + x[i+1,j] + x[i,j-1] + x[i,j+1]) = x0[i,j]

with a = dt·rate·N². The system is relaxed in place (each update sees the
neighbours already updated in the same sweep) for a small fixed number of
sweeps; it is an approximate solve, not iterated to convergence.

Reference: Stam (2003). Real-Time Fluid Dynamics for Games. GDC.
"""

import numpy as np
import numpy.typing as npt
from numba import njit

from ..constants import BoundaryKind, DIFFUSION_ITERATIONS
from ..grid.indexing import index
from ..grid.obstacle import is_obstacle
from .boundary import set_boundary_numba

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True)
def diffuse_numba(x: np.ndarray, x0: np.ndarray, kind: int, a: float,
                  n: int, iterations: int, obstacle: bool) -> None:
    """Gauss-Seidel sweeps over the interior (outer i, inner j)."""
    denom = 1.0 + 4.0 * a
    stride = n + 2

    for _ in range(iterations):
        for i in range(1, n + 1):
            for j in range(1, n + 1):
                if obstacle and is_obstacle(i, j, n):
                    continue
                k = index(i, j, n)
                x[k] = (x0[k] + a * (x[k - 1] + x[k + 1]
                                     + x[k - stride] + x[k + stride])) / denom

        set_boundary_numba(x, kind, n, obstacle)


def diffuse(x: NDArrayFloat, x0: NDArrayFloat, kind: BoundaryKind,
            rate: float, dt: float, n: int,
            iterations: int = DIFFUSION_ITERATIONS,
            obstacle: bool = True) -> None:
    """
    Diffuse `x0` into `x` in place.

    Parameters
    ----------
    x : ndarray
        Target buffer; its current contents are the initial guess.
    x0 : ndarray
        Field values at the start of the step (read only).
    kind : BoundaryKind
        Boundary rule re-applied after every sweep.
    rate : float
        Diffusion coefficient (viscosity for velocity components).
    dt : float
        Timestep.
    n : int
        Interior resolution.
    iterations : int
        Number of Gauss-Seidel sweeps.
    obstacle : bool
        Skip (and reflect around) the plate.
    """
    a = dt * rate * n * n
    diffuse_numba(x, x0, int(kind), a, n, iterations, obstacle)
