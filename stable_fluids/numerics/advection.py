"""
Semi-Lagrangian advection.

For each cell the characteristic is traced back one forward-Euler step,

    p = (i - dt·N·u0[i,j],  j - dt·N·v0[i,j])

clamped into [0.5, N+0.5]², and the previous field is resampled there by
bilinear interpolation:

    (x1,y2)───(x2,y2)
       │   p     │         w11 = (x2-px)(y2-py)   w21 = (px-x1)(y2-py)
       │         │         w12 = (x2-px)(py-y1)   w22 = (px-x1)(py-y1)
    (x1,y1)───(x2,y1)

The clamp is the only treatment of trajectories that leave the domain.
"""

import numpy as np
import numpy.typing as npt
from numba import njit

from ..constants import BoundaryKind
from ..grid.indexing import index
from ..grid.obstacle import is_obstacle
from .boundary import set_boundary_numba

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True)
def clamp(x: float, x_min: float, x_max: float) -> float:
    return max(x_min, min(x, x_max))


@njit(cache=True)
def sample_bilinear(x0: np.ndarray, px: float, py: float, n: int) -> float:
    """Bilinear sample of `x0` at a point already inside [0.5, n+0.5]²."""
    x1 = int(np.floor(px))
    x2 = x1 + 1
    y1 = int(np.floor(py))
    y2 = y1 + 1

    w11 = (x2 - px) * (y2 - py)
    w21 = (px - x1) * (y2 - py)
    w12 = (x2 - px) * (py - y1)
    w22 = (px - x1) * (py - y1)

    return (w11 * x0[index(x1, y1, n)]
            + w12 * x0[index(x1, y2, n)]
            + w21 * x0[index(x2, y1, n)]
            + w22 * x0[index(x2, y2, n)])


@njit(cache=True)
def advect_numba(x: np.ndarray, x0: np.ndarray, u0: np.ndarray, v0: np.ndarray,
                 kind: int, dt0: float, n: int, obstacle: bool) -> None:
    lo = 0.5
    hi = n + 0.5

    for i in range(1, n + 1):
        for j in range(1, n + 1):
            if obstacle and is_obstacle(i, j, n):
                continue
            k = index(i, j, n)
            px = clamp(i - dt0 * u0[k], lo, hi)
            py = clamp(j - dt0 * v0[k], lo, hi)
            x[k] = sample_bilinear(x0, px, py, n)

    set_boundary_numba(x, kind, n, obstacle)


def advect(x: NDArrayFloat, x0: NDArrayFloat, u0: NDArrayFloat, v0: NDArrayFloat,
           kind: BoundaryKind, dt: float, n: int, obstacle: bool = True) -> None:
    """
    Advect `x0` through the velocity (u0, v0) into `x` in place.

    `x` must not alias `x0`, `u0` or `v0`; the carrier may alias the
    advected field (x0 is u0 when velocity advects itself).
    """
    advect_numba(x, x0, u0, v0, int(kind), dt * n, n, obstacle)
