"""
Relaxation sweeps for the 5-point systems behind diffusion and projection.

Both steps solve, on interior cells,

    x[i, j] = (b[i, j] + a * (x[i-1, j] + x[i+1, j] + x[i, j-1] + x[i, j+1])) / c

for a fixed number of sweeps. Diffusion uses ``a = dt * rate, c = 1 + 4a``;
the pressure solve uses ``a = 1, c = 4``. The order in which cells are
visited inside a sweep is selectable:

* lexicographic - classic Gauss-Seidel, row by row, left to right. Every
  update sees the values already written earlier in the same sweep.
* red_black - Gauss-Seidel over the two checkerboard colours. Each colour
  only reads the other one, so each half-sweep is a single numpy expression.
* jacobi - every cell reads the previous sweep. One numpy expression per
  sweep, slowest convergence.
"""
import numpy as np

from .errors import ConfigurationError
from .params import JACOBI, LEXICOGRAPHIC, RED_BLACK


def sweep_lexicographic(x, b, a, c):
    rows = x.shape[0]
    for i in range(1, rows - 1):
        # x[i-1] is already this sweep's row; x[i+1] and x[i, j+1] are still
        # last sweep's values when (i, j) is visited.
        r = b[i, 1:-1] + a * (x[i - 1, 1:-1] + x[i + 1, 1:-1] + x[i, 2:])
        row = x[i]
        left = row[0]
        for j, rj in enumerate(r.tolist(), start=1):
            left = (rj + a * left) / c
            row[j] = left


def checkerboard(shape):
    """Boolean masks over the interior for the (i + j) even and odd cells."""
    ii, jj = np.indices((shape[0] - 2, shape[1] - 2))
    red = (ii + jj) % 2 == 0
    return red, ~red


def sweep_red_black(x, b, a, c, masks=None):
    if masks is None:
        masks = checkerboard(x.shape)
    inner = x[1:-1, 1:-1]
    for mask in masks:
        new = (b[1:-1, 1:-1] + a * (
            x[0:-2, 1:-1] + x[2:, 1:-1] +
            x[1:-1, 0:-2] + x[1:-1, 2:]
        )) / c
        inner[mask] = new[mask]


def sweep_jacobi(x, b, a, c):
    x[1:-1, 1:-1] = (b[1:-1, 1:-1] + a * (
        x[0:-2, 1:-1] + x[2:, 1:-1] +
        x[1:-1, 0:-2] + x[1:-1, 2:]
    )) / c


def lin_solve(systems, a, c, iterations, set_bnd, order=LEXICOGRAPHIC):
    """
    Relax every ``(x, b)`` pair in ``systems`` for ``iterations`` sweeps.

    The fields are independent of each other, so relaxing them one after
    another inside a sweep gives the same values as interleaving them cell
    by cell. ``set_bnd`` runs once after every sweep.
    """
    if order == LEXICOGRAPHIC:
        sweep = sweep_lexicographic
    elif order == RED_BLACK:
        masks = checkerboard(systems[0][0].shape)

        def sweep(x, b, a, c):
            sweep_red_black(x, b, a, c, masks)
    elif order == JACOBI:
        sweep = sweep_jacobi
    else:
        raise ConfigurationError(f"unknown relaxation order {order!r}")

    for _ in range(iterations):
        for x, b in systems:
            sweep(x, b, a, c)
        set_bnd()
