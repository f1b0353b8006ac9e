"""Diagnostic quantities for monitoring a running simulation."""

import numpy as np
import numpy.typing as npt
from typing import Dict, Tuple, Any

from ..grid.indexing import allocate_field, as_grid
from ..grid.obstacle import obstacle_mask
from .projection import compute_divergence_numba

NDArrayFloat = npt.NDArray[np.floating]


def compute_divergence(u: NDArrayFloat, v: NDArrayFloat, n: int,
                       obstacle: bool = True) -> NDArrayFloat:
    """
    Divergence stencil used by the projection, as a 2-D [i, j] array.

    Values are -0.5·h·(du + dv) on interior fluid cells and zero on the
    halo and inside the plate.
    """
    div = allocate_field(n)
    compute_divergence_numba(u, v, div, n, obstacle)
    return as_grid(div, n).copy()


def divergence_norm(u: NDArrayFloat, v: NDArrayFloat, n: int,
                    obstacle: bool = True) -> Tuple[float, float]:
    """(rms, max) of |div| over interior fluid cells."""
    div = compute_divergence(u, v, n, obstacle)
    fluid = ~obstacle_mask(n, obstacle)
    fluid[0, :] = fluid[-1, :] = False
    fluid[:, 0] = fluid[:, -1] = False

    values = div[fluid]
    rms = float(np.sqrt(np.mean(values**2)))
    return rms, float(np.abs(values).max())


def _finite_range(a: NDArrayFloat) -> Tuple[float, float]:
    finite = a[np.isfinite(a)]
    if finite.size == 0:
        return np.nan, np.nan
    return float(finite.min()), float(finite.max())


def compute_field_bounds(density: NDArrayFloat, u: NDArrayFloat,
                         v: NDArrayFloat) -> Dict[str, Any]:
    """Check fields for non-finite values and report their finite ranges."""
    fields = {'density': density, 'u': u, 'v': v}
    bounds: Dict[str, Any] = {
        'has_nan': any(bool(np.isnan(a).any()) for a in fields.values()),
        'has_inf': any(bool(np.isinf(a).any()) for a in fields.values()),
    }
    for name, a in fields.items():
        bounds[f'{name}_min'], bounds[f'{name}_max'] = _finite_range(a)

    speed: NDArrayFloat = np.sqrt(u**2 + v**2)
    bounds['speed_max'] = _finite_range(speed)[1]
    return bounds
