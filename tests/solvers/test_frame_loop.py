"""
Tests for the emitter and the substepped frame loop.
"""

import pytest
import numpy as np

from stable_fluids.grid.indexing import index
from stable_fluids.solvers.emitter import Emitter
from stable_fluids.solvers.fluid_solver import FluidSolver
from stable_fluids.solvers.frame_loop import FrameLoopResult, run_frames


class TestEmitter:

    def test_default_cell(self):
        assert Emitter().cell(64) == (8, 32)
        assert Emitter().cell(4) == (1, 2)

    def test_explicit_cell(self):
        assert Emitter(position=(3, 5)).cell(16) == (3, 5)

    @pytest.mark.parametrize("position", [(0, 5), (5, 17), (-1, -1)])
    def test_outside_interior(self, position):
        with pytest.raises(ValueError):
            Emitter(position=position).cell(16)

    def test_apply_sets_single_cell(self, small_solver):
        n = small_solver.N
        small_solver.set_sources(v=np.ones((n + 2)**2))
        emitter = Emitter(position=(4, 6), density_rate=10.0, u_rate=2.0, v_rate=-1.0)

        emitter.apply(small_solver)

        k = index(4, 6, n)
        assert small_solver.density_source[k] == 10.0
        assert small_solver.u_source[k] == 2.0
        assert small_solver.v_source[k] == -1.0
        # Everything else was cleared
        assert np.count_nonzero(small_solver.v_source) == 1
        assert np.count_nonzero(small_solver.density_source) == 1


class TestRunFrames:

    def test_counts(self, small_solver):
        result = run_frames(small_solver, Emitter(), n_frames=3, substeps=2, report_freq=2)

        assert isinstance(result, FrameLoopResult)
        assert result.frames == 3
        assert result.ticks == 6
        assert small_solver.tick_count == 6
        assert len(result.sim_time_ms) == 1
        assert not result.stopped_early

    def test_callback_per_frame(self, small_solver):
        seen = []
        run_frames(small_solver, Emitter(), n_frames=4, substeps=1,
                   callback=lambda frame, solver: seen.append((frame, solver.tick_count)))
        assert seen == [(0, 1), (1, 2), (2, 3), (3, 4)]

    def test_zero_frames(self, small_solver):
        result = run_frames(small_solver, Emitter(), n_frames=0)
        assert result.frames == 0 and small_solver.tick_count == 0

    @pytest.mark.parametrize("kwargs", [
        {'n_frames': -1},
        {'n_frames': 1, 'substeps': 0},
        {'n_frames': 1, 'report_freq': 0},
    ])
    def test_invalid_arguments(self, small_solver, kwargs):
        with pytest.raises(ValueError):
            run_frames(small_solver, Emitter(), **kwargs)

    def test_stops_on_nonfinite(self, small_solver):
        def poison(frame, solver):
            solver.density[index(2, 2, solver.N)] = np.nan

        result = run_frames(small_solver, Emitter(), n_frames=5, substeps=1,
                            report_freq=1, callback=poison, stop_on_nonfinite=True)

        assert result.stopped_early
        assert result.frames == 1

    def test_emitter_fills_density(self):
        solver = FluidSolver.configure(32)
        run_frames(solver, Emitter(), n_frames=2, substeps=4)
        i, j = Emitter().cell(32)
        assert solver.read_density()[i, j] > 0.0
