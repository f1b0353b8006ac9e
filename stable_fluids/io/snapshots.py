"""
Field snapshots as compressed NumPy archives.

Each snapshot stores the density and velocity fields (2-D, indexed [i, j],
halo included) together with the resolution, tick count and simulated
time, so a renderer can replay a run without the solver.
"""

from pathlib import Path
from typing import NamedTuple, Union

import numpy as np
import numpy.typing as npt
from loguru import logger

NDArrayFloat = npt.NDArray[np.floating]


class Snapshot(NamedTuple):
    """Fields of one saved solver state."""
    density: NDArrayFloat
    u: NDArrayFloat
    v: NDArrayFloat
    resolution: int
    tick: int
    time: float


def snapshot_path(directory: Union[str, Path], case_name: str, frame: int) -> Path:
    """Conventional snapshot file name: <case>_<frame:04d>.npz."""
    return Path(directory) / f"{case_name}_{frame:04d}.npz"


def save_snapshot(path: Union[str, Path], solver) -> Path:
    """
    Write the solver's current fields to `path`.

    The ``.npz`` suffix is added if missing. Returns the written path.
    """
    path = Path(path)
    if path.suffix != '.npz':
        path = path.with_suffix('.npz')
    path.parent.mkdir(parents=True, exist_ok=True)

    u, v = solver.read_velocity()
    np.savez_compressed(
        path,
        density=solver.read_density(),
        u=u,
        v=v,
        resolution=np.int64(solver.N),
        tick=np.int64(solver.tick_count),
        time=np.float64(solver.time),
    )
    logger.debug(f"Snapshot written: {path}")
    return path


def load_snapshot(path: Union[str, Path]) -> Snapshot:
    """Read a snapshot written by `save_snapshot`."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")

    with np.load(path) as data:
        return Snapshot(
            density=data['density'].copy(),
            u=data['u'].copy(),
            v=data['v'].copy(),
            resolution=int(data['resolution']),
            tick=int(data['tick']),
            time=float(data['time']),
        )
