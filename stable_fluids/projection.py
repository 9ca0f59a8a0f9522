import logging

import numpy as np

from .boundary import mirror_bnd, set_velocity_bnd
from .params import LEXICOGRAPHIC
from .relax import lin_solve

logger = logging.getLogger(__name__)


def divergence(vx, vy, out=None):
    """
    ``-0.5 * (dvx/dcol + dvy/drow)`` on interior cells, central differences.

    Border cells of ``out`` are set to zero when a new array is allocated and
    left untouched otherwise.
    """
    if out is None:
        out = np.zeros_like(vx)
    out[1:-1, 1:-1] = -0.5 * (
        vx[1:-1, 2:] - vx[1:-1, 0:-2] +
        vy[2:, 1:-1] - vy[0:-2, 1:-1]
    )
    return out


def max_divergence(vx, vy, margin=1):
    """Largest |divergence| over interior cells at least ``margin`` cells from the border."""
    div = divergence(vx, vy)
    inner = div[margin:div.shape[0] - margin, margin:div.shape[1] - margin]
    if inner.size == 0:
        return 0.0
    return float(np.abs(inner).max())


def project(grid, iterations, order=LEXICOGRAPHIC):
    """Remove the divergent part of the velocity with a pressure Poisson solve."""
    vx, vy = grid.vx2d, grid.vy2d
    div, p = grid.divergence2d, grid.pressure2d

    # Scratch is rebuilt from scratch every call
    div.fill(0.0)
    p.fill(0.0)
    divergence(vx, vy, out=div)
    mirror_bnd(div)
    mirror_bnd(p)

    lin_solve([(p, div)], 1.0, 4.0, iterations, lambda: mirror_bnd(p), order)

    # Subtract pressure gradient
    vx[1:-1, 1:-1] -= 0.5 * (p[1:-1, 2:] - p[1:-1, 0:-2])
    vy[1:-1, 1:-1] -= 0.5 * (p[2:, 1:-1] - p[0:-2, 1:-1])
    set_velocity_bnd(vx, vy)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "project: %d sweeps (%s), residual max|div|=%.3g",
            iterations, order, max_divergence(vx, vy),
        )
