"""
Frame loop: emitter → substeps → callback, with averaged timing.

Each rendered frame runs several solver ticks so that the timestep stays
small relative to the target frame rate. Simulation wall time is summed
over `report_freq` frames and logged as a per-frame average.
"""

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from loguru import logger

from ..numerics.diagnostics import compute_field_bounds
from .emitter import Emitter
from .fluid_solver import FluidSolver


@dataclass
class FrameLoopResult:
    """Summary of a frame loop run."""

    frames: int = 0
    ticks: int = 0
    sim_time_ms: List[float] = field(default_factory=list)  # Average per frame, per report
    stopped_early: bool = False


def run_frames(solver: FluidSolver,
               emitter: Emitter,
               n_frames: int,
               substeps: int = 8,
               report_freq: int = 20,
               callback: Optional[Callable[[int, FluidSolver], None]] = None,
               stop_on_nonfinite: bool = False) -> FrameLoopResult:
    """
    Run `n_frames` frames of `substeps` ticks each.

    Parameters
    ----------
    solver : FluidSolver
        Simulation context, advanced in place.
    emitter : Emitter
        Re-applied to the source buffers at the start of every frame.
    n_frames : int
        Number of frames to run.
    substeps : int
        Solver ticks per frame.
    report_freq : int
        Frames between timing/bounds reports.
    callback : callable, optional
        Called as ``callback(frame, solver)`` after each frame's ticks.
    stop_on_nonfinite : bool
        Stop at the first report that finds NaN/Inf in the fields.

    Returns
    -------
    FrameLoopResult
    """
    if n_frames < 0:
        raise ValueError(f"n_frames must be non-negative, got {n_frames}")
    if substeps < 1:
        raise ValueError(f"substeps must be at least 1, got {substeps}")
    if report_freq < 1:
        raise ValueError(f"report_freq must be at least 1, got {report_freq}")

    result = FrameLoopResult()
    sim_time = 0.0

    for frame in range(n_frames):
        emitter.apply(solver)

        t0 = time.perf_counter()
        for _ in range(substeps):
            solver.tick()
        sim_time += (time.perf_counter() - t0) * 1000.0

        result.frames += 1
        result.ticks += substeps

        if callback is not None:
            callback(frame, solver)

        if result.frames % report_freq == 0:
            avg_ms = sim_time / report_freq
            result.sim_time_ms.append(avg_ms)
            sim_time = 0.0

            bounds = compute_field_bounds(solver.density, solver.u, solver.v)
            logger.info(
                f"Frame {result.frames:5d} | sim {avg_ms:8.3f} ms/frame | "
                f"density max {bounds['density_max']:.3e} | "
                f"speed max {bounds['speed_max']:.3e}"
            )

            if bounds['has_nan'] or bounds['has_inf']:
                logger.warning(f"Non-finite values in fields at frame {result.frames}")
                if stop_on_nonfinite:
                    result.stopped_early = True
                    break

    return result
