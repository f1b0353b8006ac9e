"""
Flat storage indexing for the halo-padded simulation grid.

Every field is a 1-D float64 buffer of (N+2)*(N+2) values:
    - Interior cells: 1 <= i, j <= N
    - Halo ring: i or j in {0, N+1}
    - Offset: k = i + (N+2) * j   (i varies fastest)

Kernels address the flat buffer directly through `index`; Python callers
that prefer 2-D access use `as_grid`, which returns a view indexed [i, j].
"""

import numpy as np
import numpy.typing as npt
from numba import njit

from ..constants import NGHOST, get_grid_shape, get_interior_slice

NDArrayFloat = npt.NDArray[np.floating]


@njit(cache=True)
def index(i: int, j: int, n: int) -> int:
    """Linear offset of cell (i, j), valid for 0 <= i, j <= n+1 (unchecked)."""
    return i + (n + 2) * j


def field_size(n: int) -> int:
    """Number of storage cells, halo included."""
    side = n + 2 * NGHOST
    return side * side


def allocate_field(n: int) -> NDArrayFloat:
    """Zero-initialised flat field buffer."""
    return np.zeros(field_size(n), dtype=np.float64)


def as_grid(field: NDArrayFloat, n: int) -> NDArrayFloat:
    """
    View a flat field as a 2-D array indexed [i, j].

    The result aliases `field`: writes through the view update the buffer,
    and ``as_grid(x, n)[i, j]`` is ``x[index(i, j, n)]``.

    Raises
    ------
    ValueError
        If the buffer does not hold (n+2)**2 values.
    """
    if field.ndim != 1 or field.size != field_size(n):
        raise ValueError(
            f"Field of shape {field.shape} does not match resolution {n} "
            f"(expected ({field_size(n)},))"
        )
    side = get_grid_shape(n)[0]
    # Row-major (side, side) puts j first; transpose to get [i, j]
    return field.reshape(side, side).T


def interior(grid: NDArrayFloat) -> NDArrayFloat:
    """Interior block of a 2-D field view (halo stripped)."""
    return grid[get_interior_slice()]
