"""
Static rectangular obstacle used to shed a von Karman vortex street.

The obstacle is a thin plate centred on the horizontal mid-line:

        i = N/2-1 .. N/2+1   (3 cells wide)
        j = 2*(N/5) .. 3*(N/5)

Obstacle cells are skipped by every solver loop. The boundary applier
treats the plate as an internal wall: its face cells are the wall's halo
and are refilled from the neighbouring fluid, while the core cells
strictly inside the faces keep their initial value.
"""

from typing import NamedTuple

import numpy as np
import numpy.typing as npt
from numba import njit

from ..constants import get_grid_shape

NDArrayBool = npt.NDArray[np.bool_]

# Smallest resolution whose face cells and mirrored fluid cells stay inside the interior
MIN_OBSTACLE_RESOLUTION = 6


@njit(cache=True)
def is_obstacle(i: int, j: int, n: int) -> bool:
    """True if cell (i, j) lies inside the solid plate."""
    half = n // 2
    band = n // 5
    return (i >= half - 1 and i <= half + 1
            and j >= 2 * band and j <= 3 * band)


class ObstacleBox(NamedTuple):
    """Inclusive cell bounds of the plate."""
    i_min: int
    i_max: int
    j_min: int
    j_max: int

    @classmethod
    def from_resolution(cls, n: int) -> 'ObstacleBox':
        half = n // 2
        band = n // 5
        return cls(half - 1, half + 1, 2 * band, 3 * band)

    def contains(self, i: int, j: int) -> bool:
        return self.i_min <= i <= self.i_max and self.j_min <= j <= self.j_max

    @property
    def n_cells(self) -> int:
        return (self.i_max - self.i_min + 1) * (self.j_max - self.j_min + 1)


def obstacle_mask(n: int, enabled: bool = True) -> NDArrayBool:
    """
    Boolean mask over the padded grid, indexed [i, j].

    Parameters
    ----------
    n : int
        Interior resolution.
    enabled : bool
        If False, the mask is all False (no obstacle in the scene).
    """
    mask = np.zeros(get_grid_shape(n), dtype=np.bool_)
    if enabled:
        box = ObstacleBox.from_resolution(n)
        mask[box.i_min:box.i_max + 1, box.j_min:box.j_max + 1] = True
    return mask


def obstacle_core_mask(n: int, enabled: bool = True) -> NDArrayBool:
    """
    Plate cells strictly inside its faces, indexed [i, j].

    No stage ever writes these cells; the face cells around them are
    refilled by the boundary applier.
    """
    mask = np.zeros(get_grid_shape(n), dtype=np.bool_)
    if enabled:
        box = ObstacleBox.from_resolution(n)
        mask[box.i_min + 1:box.i_max, box.j_min + 1:box.j_max] = True
    return mask
