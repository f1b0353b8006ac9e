"""
I/O module for simulation output.

This module provides:
- Compressed .npz snapshots of the density and velocity fields
"""

from .snapshots import (
    Snapshot,
    snapshot_path,
    save_snapshot,
    load_snapshot,
)

__all__ = [
    'Snapshot',
    'snapshot_path',
    'save_snapshot',
    'load_snapshot',
]
