import logging

import numpy as np

from .boundary import set_bnd
from .errors import InvariantViolation

logger = logging.getLogger(__name__)


def advect(grid, dt):
    """
    Semi-Lagrangian transport of density and velocity.

    Every interior cell traces back along its own pre-step velocity,
    clamps the foot point onto the grid and bilinearly resamples the
    snapshot there. Only snapshots are read, so the whole sweep is one
    vectorised pass.
    """
    rows, cols = grid.shape
    grid.snapshot()
    d0 = grid.previous_density2d
    u0 = grid.previous_vx2d
    v0 = grid.previous_vy2d

    I, J = np.meshgrid(np.arange(1, rows - 1), np.arange(1, cols - 1), indexing="ij")

    # Backtrace
    x = J - dt * u0[1:-1, 1:-1]
    y = I - dt * v0[1:-1, 1:-1]

    if not (np.isfinite(x).all() and np.isfinite(y).all()):
        raise InvariantViolation("advect: non-finite backtrace position")

    # The clamp keeps every sample on the grid
    np.clip(x, 0.0, cols - 1.0, out=x)
    np.clip(y, 0.0, rows - 1.0, out=y)

    j0 = np.floor(x).astype(np.intp)
    i0 = np.floor(y).astype(np.intp)
    j1 = np.minimum(j0 + 1, cols - 1)
    i1 = np.minimum(i0 + 1, rows - 1)
    _check_indices(i0, j0, rows, cols)

    s1 = x - j0
    s0 = 1.0 - s1
    t1 = y - i0
    t0 = 1.0 - t1

    for d, src in ((grid.density2d, d0), (grid.vx2d, u0), (grid.vy2d, v0)):
        d[1:-1, 1:-1] = (
            s0 * (t0 * src[i0, j0] + t1 * src[i1, j0]) +
            s1 * (t0 * src[i0, j1] + t1 * src[i1, j1])
        )

    set_bnd(grid)
    logger.debug("advect: dt=%.3g", dt)


def _check_indices(i0, j0, rows, cols):
    if i0.size == 0:
        return
    if i0.min() < 0 or i0.max() > rows - 1 or j0.min() < 0 or j0.max() > cols - 1:
        raise InvariantViolation(
            f"advect: sample index outside {rows}x{cols} grid "
            f"(rows {i0.min()}..{i0.max()}, cols {j0.min()}..{j0.max()})"
        )
