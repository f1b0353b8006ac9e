"""
Grid layout module.

This module provides:
- Flat (N+2) x (N+2) storage indexing with a one-cell halo
- 2-D views of flat field buffers
- The static rectangular obstacle mask
"""

from .indexing import (
    index,
    field_size,
    allocate_field,
    as_grid,
    interior,
)

from .obstacle import (
    is_obstacle,
    obstacle_mask,
    obstacle_core_mask,
    ObstacleBox,
    MIN_OBSTACLE_RESOLUTION,
)

__all__ = [
    # Indexing
    'index',
    'field_size',
    'allocate_field',
    'as_grid',
    'interior',
    # Obstacle
    'is_obstacle',
    'obstacle_mask',
    'obstacle_core_mask',
    'ObstacleBox',
    'MIN_OBSTACLE_RESOLUTION',
]
