"""
Global constants for the Stable Fluids solver.

This module defines constants used throughout the codebase to ensure
consistency in storage layout, boundary handling and iteration counts.
"""

from enum import IntEnum

# Number of halo (ghost) cell layers on each side of the interior.
# The 5-point stencils used by every stage only reach one cell out.
NGHOST = 1


class BoundaryKind(IntEnum):
    """Reflection rule used when filling halo and obstacle-adjacent cells."""
    CONTINUOUS = 0       # Zero-gradient copy on every edge
    HORIZONTAL_WALL = 1  # Odd reflection on left/right edges (x-velocity)
    VERTICAL_WALL = 2    # Odd reflection on top/bottom edges (y-velocity)


# Plain integer copies for the Numba kernels (frozen at compile time)
CONTINUOUS = int(BoundaryKind.CONTINUOUS)
HORIZONTAL_WALL = int(BoundaryKind.HORIZONTAL_WALL)
VERTICAL_WALL = int(BoundaryKind.VERTICAL_WALL)

# Boundary kind required by each field role
DENSITY_BOUNDARY = CONTINUOUS
U_BOUNDARY = HORIZONTAL_WALL
V_BOUNDARY = VERTICAL_WALL
PRESSURE_BOUNDARY = CONTINUOUS
DIVERGENCE_BOUNDARY = CONTINUOUS

# Fixed Gauss-Seidel sweep counts (approximate solves, never run to convergence)
DIFFUSION_ITERATIONS = 4
PROJECTION_ITERATIONS = 10

# Defaults of the reference scene
DEFAULT_RESOLUTION = 64
DEFAULT_DIFFUSION_RATE = 1.0e-4
DEFAULT_SUBSTEPS = 8
DEFAULT_FRAME_RATE = 30.0
DEFAULT_DT = 1.0 / (DEFAULT_SUBSTEPS * DEFAULT_FRAME_RATE)


def get_interior_slice():
    """
    Return the slice for interior cells of a 2-D field view.

    With NGHOST halo cells on each side:
    - grid.shape = (N + 2*NGHOST, N + 2*NGHOST)
    - Interior cells: grid[NGHOST:-NGHOST, NGHOST:-NGHOST]

    Returns
    -------
    tuple of slices
        (slice(NGHOST, -NGHOST), slice(NGHOST, -NGHOST))
    """
    return (slice(NGHOST, -NGHOST), slice(NGHOST, -NGHOST))


def get_grid_shape(n: int) -> tuple:
    """
    Get the 2-D shape of a field including its halo.

    Parameters
    ----------
    n : int
        Number of interior cells per direction.

    Returns
    -------
    tuple
        (n + 2*NGHOST, n + 2*NGHOST)
    """
    return (n + 2 * NGHOST, n + 2 * NGHOST)
