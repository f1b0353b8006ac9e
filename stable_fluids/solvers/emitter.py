"""Fixed-position smoke/force emitter feeding the solver's source buffers."""

from dataclasses import dataclass
from typing import Optional, Tuple

from ..grid.indexing import index


@dataclass
class Emitter:
    """
    Single-cell source re-applied before every frame.

    Attributes
    ----------
    position : (i, j), optional
        Emitting cell. None places it at (N/8, N/2), left of the obstacle
        on the mid-line.
    density_rate, u_rate, v_rate : float
        Injection rates written into the source buffers.
    """

    position: Optional[Tuple[int, int]] = None
    density_rate: float = 4000.0
    u_rate: float = 500.0
    v_rate: float = 0.0

    def cell(self, n: int) -> Tuple[int, int]:
        """Emitting cell for resolution `n`."""
        if self.position is None:
            return max(1, n // 8), max(1, n // 2)

        i, j = (int(c) for c in self.position)
        if not (1 <= i <= n and 1 <= j <= n):
            raise ValueError(f"Emitter position {(i, j)} outside interior 1..{n}")
        return i, j

    def apply(self, solver) -> None:
        """Zero the solver's sources, then set the emitting cell."""
        i, j = self.cell(solver.N)
        k = index(i, j, solver.N)

        solver.clear_sources()
        solver.density_source[k] = self.density_rate
        solver.u_source[k] = self.u_rate
        solver.v_source[k] = self.v_rate
