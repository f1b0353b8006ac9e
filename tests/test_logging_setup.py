"""
Tests for the loguru setup and the solver's log output.
"""

import io

import pytest

from stable_fluids.solvers.fluid_solver import FluidSolver
from stable_fluids.utils.logging import setup_logging


@pytest.fixture
def log_sink():
    sink = io.StringIO()
    setup_logging(level="DEBUG", show_time=False, sink=sink)
    yield sink
    setup_logging()


class TestLogging:

    def test_init_banner(self, log_sink):
        FluidSolver.configure(16)
        output = log_sink.getvalue()
        assert "Stable Fluids Solver Initialized" in output
        assert "Grid size: 16 x 16" in output

    def test_tick_logged_at_debug(self, log_sink):
        solver = FluidSolver.configure(16)
        solver.tick()
        assert "tick 1:" in log_sink.getvalue()

    def test_level_filters(self):
        sink = io.StringIO()
        setup_logging(level="WARNING", show_time=False, sink=sink)
        try:
            FluidSolver.configure(16)
        finally:
            setup_logging()
        assert sink.getvalue() == ""
