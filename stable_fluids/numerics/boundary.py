"""
Boundary conditions for the halo-padded Stable Fluids grid.

Every stage that mutates a field calls `set_boundary` afterwards, so halo
cells never carry independently integrated state.

Grid Layout (N x N interior, one halo ring):

    j = N+1  ┌─────────────────────┐  (halo)
    j = N    │                     │
             │   ┌───┐             │
             │   │ X │  obstacle   │
             │   └───┘             │
    j = 1    │                     │
    j = 0    └─────────────────────┘  (halo)
           i=0                   i=N+1

Boundary kinds:
    CONTINUOUS       halo = adjacent interior on all four edges
    HORIZONTAL_WALL  halo = -interior on left/right edges, copy on top/bottom
    VERTICAL_WALL    halo = -interior on top/bottom edges, copy on left/right

Obstacle:
    The plate is an internal wall whose outermost cells act as its halo:
    each face cell is set from the fluid cell just outside it, using the
    same sign rule as the matching domain edge. Plate cells strictly inside
    the faces are never written.
"""

import numpy as np
import numpy.typing as npt
from numba import njit

from ..constants import (
    BoundaryKind,
    CONTINUOUS,
    HORIZONTAL_WALL,
    VERTICAL_WALL,
    DENSITY_BOUNDARY,
    U_BOUNDARY,
    V_BOUNDARY,
    PRESSURE_BOUNDARY,
    DIVERGENCE_BOUNDARY,
)
from ..grid.indexing import index

NDArrayFloat = npt.NDArray[np.floating]


FIELD_BOUNDARY = {
    'density': BoundaryKind(DENSITY_BOUNDARY),
    'u': BoundaryKind(U_BOUNDARY),
    'v': BoundaryKind(V_BOUNDARY),
    'pressure': BoundaryKind(PRESSURE_BOUNDARY),
    'divergence': BoundaryKind(DIVERGENCE_BOUNDARY),
}


@njit(cache=True)
def _reflect_obstacle(x: np.ndarray, kind: int, n: int) -> None:
    """Fill the plate's face cells from the fluid cells just outside them."""
    half = n // 2
    j_lo = 2 * (n // 5)
    j_hi = 3 * (n // 5)
    sign_i = -1.0 if kind == HORIZONTAL_WALL else 1.0
    sign_j = -1.0 if kind == VERTICAL_WALL else 1.0

    # Left/right faces
    for j in range(j_lo, j_hi + 1):
        x[index(half - 1, j, n)] = sign_i * x[index(half - 2, j, n)]
        x[index(half + 1, j, n)] = sign_i * x[index(half + 2, j, n)]

    # Bottom/top faces (the plate's corner cells end up with these values)
    for i in range(half - 1, half + 2):
        x[index(i, j_lo, n)] = sign_j * x[index(i, j_lo - 1, n)]
        x[index(i, j_hi, n)] = sign_j * x[index(i, j_hi + 1, n)]


@njit(cache=True)
def set_boundary_numba(x: np.ndarray, kind: int, n: int, obstacle: bool) -> None:
    """Numba kernel behind `set_boundary`."""
    # Bottom/top edges (j = 0 and j = N+1)
    for i in range(1, n + 1):
        if kind == VERTICAL_WALL:
            x[index(i, 0, n)] = -x[index(i, 1, n)]
            x[index(i, n + 1, n)] = -x[index(i, n, n)]
        else:
            x[index(i, 0, n)] = x[index(i, 1, n)]
            x[index(i, n + 1, n)] = x[index(i, n, n)]

    # Left/right edges (i = 0 and i = N+1)
    for j in range(1, n + 1):
        if kind == HORIZONTAL_WALL:
            x[index(0, j, n)] = -x[index(1, j, n)]
            x[index(n + 1, j, n)] = -x[index(n, j, n)]
        else:
            x[index(0, j, n)] = x[index(1, j, n)]
            x[index(n + 1, j, n)] = x[index(n, j, n)]

    # Corners: average of the two neighbouring halo cells
    x[index(0, 0, n)] = 0.5 * (x[index(0, 1, n)] + x[index(1, 0, n)])
    x[index(n + 1, 0, n)] = 0.5 * (x[index(n + 1, 1, n)] + x[index(n, 0, n)])
    x[index(0, n + 1, n)] = 0.5 * (x[index(0, n, n)] + x[index(1, n + 1, n)])
    x[index(n + 1, n + 1, n)] = 0.5 * (x[index(n + 1, n, n)] + x[index(n, n + 1, n)])

    # Face cells lie strictly inside rows/columns 2..N-1, so the edges above
    # never read them
    if obstacle:
        _reflect_obstacle(x, kind, n)


def set_boundary(x: NDArrayFloat, kind: BoundaryKind, n: int,
                 obstacle: bool = True) -> None:
    """
    Overwrite halo and obstacle-adjacent cells of `x` in place.

    Parameters
    ----------
    x : ndarray, shape ((n+2)**2,)
        Flat field buffer.
    kind : BoundaryKind
        Reflection rule (see module docstring).
    n : int
        Interior resolution.
    obstacle : bool
        Whether the plate is part of the scene.
    """
    set_boundary_numba(x, int(kind), n, obstacle)


def boundary_for(role: str) -> BoundaryKind:
    """Boundary kind required by a field role ('density', 'u', 'v', ...)."""
    try:
        return FIELD_BOUNDARY[role]
    except KeyError:
        raise ValueError(
            f"Unknown field role: {role!r}. Expected one of {sorted(FIELD_BOUNDARY)}"
        ) from None


__all__ = [
    'FIELD_BOUNDARY',
    'CONTINUOUS',
    'HORIZONTAL_WALL',
    'VERTICAL_WALL',
    'set_boundary',
    'set_boundary_numba',
    'boundary_for',
]
