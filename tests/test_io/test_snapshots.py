"""
Tests for .npz field snapshots.
"""

import pytest
import numpy as np

from stable_fluids.io import Snapshot, save_snapshot, load_snapshot, snapshot_path
from stable_fluids.solvers import Emitter, run_frames


class TestSnapshots:

    def test_path_convention(self, tmp_path):
        assert snapshot_path(tmp_path, 'wake', 7) == tmp_path / 'wake_0007.npz'

    def test_save_and_load(self, tmp_path, small_solver):
        run_frames(small_solver, Emitter(), n_frames=1, substeps=2)

        written = save_snapshot(tmp_path / 'out' / 'state', small_solver)
        assert written.suffix == '.npz'
        assert written.exists()

        snap = load_snapshot(written)
        u, v = small_solver.read_velocity()

        assert isinstance(snap, Snapshot)
        assert snap.resolution == small_solver.N
        assert snap.tick == 2
        assert snap.time == pytest.approx(small_solver.time)
        np.testing.assert_array_equal(snap.density, small_solver.read_density())
        np.testing.assert_array_equal(snap.u, u)
        np.testing.assert_array_equal(snap.v, v)

    def test_missing_snapshot(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_snapshot(tmp_path / 'nothing.npz')
