"""External source injection: x += dt * s over the whole buffer."""

import numpy as np
import numpy.typing as npt

NDArrayFloat = npt.NDArray[np.floating]


def add_source(x: NDArrayFloat, s: NDArrayFloat, dt: float) -> None:
    """Add a per-cell injection rate `s`, scaled by the timestep, to `x` in place."""
    x += dt * s
