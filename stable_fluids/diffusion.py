import logging

from .boundary import set_bnd
from .params import LEXICOGRAPHIC
from .relax import lin_solve

logger = logging.getLogger(__name__)


def diffuse(grid, dt, rate, iterations, order=LEXICOGRAPHIC):
    """
    Implicit diffusion of density and both velocity components.

    Each interior cell relaxes toward
    ``(old + a * sum(neighbours)) / (1 + 4a)`` with ``a = dt * rate``;
    the previous_* buffers hold ``old``. Unconditionally stable for any a.
    """
    a = dt * rate
    if a == 0.0:
        # (old + 0) / 1 == old: nothing to solve
        logger.debug("diffuse: a == 0, skipped")
        return

    grid.snapshot()
    lin_solve(
        [
            (grid.density2d, grid.previous_density2d),
            (grid.vx2d, grid.previous_vx2d),
            (grid.vy2d, grid.previous_vy2d),
        ],
        a, 1 + 4 * a, iterations,
        lambda: set_bnd(grid),
        order,
    )
    logger.debug("diffuse: a=%.3g, %d sweeps (%s)", a, iterations, order)
