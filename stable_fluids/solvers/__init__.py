"""
Solver components for the 2D Stable Fluids simulation.

This package provides:
    - The simulation context and tick orchestration (FluidSolver)
    - A fixed-position emitter for source injection
    - A frame loop with substepping and timing reports
"""

from .fluid_solver import (
    SolverConfig,
    FluidSolver,
    ConfigurationError,
)

from .emitter import Emitter

from .frame_loop import (
    FrameLoopResult,
    run_frames,
)

__all__ = [
    # Solver
    'SolverConfig',
    'FluidSolver',
    'ConfigurationError',
    # Emitter
    'Emitter',
    # Frame loop
    'FrameLoopResult',
    'run_frames',
]
