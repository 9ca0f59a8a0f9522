import numpy as np
import pytest

from stable_fluids.boundary import set_bnd
from stable_fluids.diffusion import diffuse
from stable_fluids.grid import GridState
from stable_fluids.params import JACOBI, LEXICOGRAPHIC, RED_BLACK

ORDERS = [LEXICOGRAPHIC, RED_BLACK, JACOBI]


def naive_gauss_seidel(grid, a, iterations):
    """Cell-by-cell reference, written the long way round."""
    d0 = grid.density2d.copy()
    u0 = grid.vx2d.copy()
    v0 = grid.vy2d.copy()
    d, u, v = grid.density2d, grid.vx2d, grid.vy2d
    for _ in range(iterations):
        for i in range(1, grid.rows - 1):
            for j in range(1, grid.columns - 1):
                for x, x0 in ((d, d0), (u, u0), (v, v0)):
                    x[i, j] = (x0[i, j] + a * (
                        x[i - 1, j] + x[i + 1, j] + x[i, j - 1] + x[i, j + 1]
                    )) / (1 + 4 * a)
        set_bnd(grid)


@pytest.mark.parametrize("order", ORDERS)
@pytest.mark.parametrize("iterations", [1, 7, 20])
def test_zero_rate_is_identity(random_grid, order, iterations):
    grid = random_grid(consistent=False)
    before = grid.copy()
    diffuse(grid, 0.1, 0.0, iterations, order)
    np.testing.assert_array_equal(grid.density, before.density)
    np.testing.assert_array_equal(grid.vx, before.vx)
    np.testing.assert_array_equal(grid.vy, before.vy)


@pytest.mark.parametrize("order", ORDERS)
def test_stays_within_input_bounds(random_grid, order):
    grid = random_grid(seed=3)
    lo, hi = grid.density.min(), grid.density.max()
    vmax = max(np.abs(grid.vx).max(), np.abs(grid.vy).max())

    diffuse(grid, 0.5, 2.0, 20, order)

    assert grid.density.min() >= lo - 1e-12
    assert grid.density.max() <= hi + 1e-12
    assert np.abs(grid.vx).max() <= vmax + 1e-12
    assert np.abs(grid.vy).max() <= vmax + 1e-12


def test_lexicographic_matches_cell_by_cell_sweep(random_grid):
    grid = random_grid(seed=5)
    reference = grid.copy()
    a = 0.3
    diffuse(grid, 0.1, 3.0, 6, LEXICOGRAPHIC)
    naive_gauss_seidel(reference, a, 6)
    np.testing.assert_allclose(grid.density, reference.density, rtol=0, atol=1e-12)
    np.testing.assert_allclose(grid.vx, reference.vx, rtol=0, atol=1e-12)
    np.testing.assert_allclose(grid.vy, reference.vy, rtol=0, atol=1e-12)


def test_orders_agree_when_converged(random_grid):
    grids = {order: random_grid(seed=7) for order in ORDERS}
    for order, grid in grids.items():
        diffuse(grid, 1.0, 0.05, 200, order)
    lex = grids[LEXICOGRAPHIC].density
    np.testing.assert_allclose(grids[RED_BLACK].density, lex, atol=1e-9)
    np.testing.assert_allclose(grids[JACOBI].density, lex, atol=1e-9)


def test_spike_spreads_to_neighbours(assert_walls):
    grid = GridState(7, 7)
    grid.set_density(3, 3, 1.0)
    diffuse(grid, 0.1, 1.0, 20)
    d = grid.density2d
    assert d[3, 3] < 1.0
    assert d[2, 3] > 0.0 and d[3, 4] > 0.0
    assert d[2, 3] == pytest.approx(d[4, 3], rel=0.05)
    assert_walls(grid.vx2d, grid.vy2d)
