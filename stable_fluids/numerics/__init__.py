"""
Numerical kernels for the Stable Fluids solver.

This module provides:
- Halo/obstacle boundary conditions
- Source injection
- Implicit diffusion (Gauss-Seidel)
- Semi-Lagrangian advection with bilinear resampling
- Pressure projection
- Divergence and field-bounds diagnostics
"""

from .boundary import (
    FIELD_BOUNDARY,
    set_boundary,
    boundary_for,
)

from .sources import add_source

from .diffusion import diffuse

from .advection import (
    advect,
    sample_bilinear,
)

from .projection import project

from .diagnostics import (
    compute_divergence,
    divergence_norm,
    compute_field_bounds,
)

__all__ = [
    # Boundary conditions
    'FIELD_BOUNDARY',
    'set_boundary',
    'boundary_for',
    # Sources
    'add_source',
    # Solver stages
    'diffuse',
    'advect',
    'sample_bilinear',
    'project',
    # Diagnostics
    'compute_divergence',
    'divergence_norm',
    'compute_field_bounds',
]
