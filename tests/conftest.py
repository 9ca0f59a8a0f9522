import numpy as np
import pytest

from stable_fluids.boundary import set_bnd
from stable_fluids.grid import GridState


def _random_grid(rows=12, columns=9, seed=0, consistent=True):
    rng = np.random.default_rng(seed)
    grid = GridState(rows, columns)
    grid.density[:] = rng.uniform(0.0, 1.0, rows * columns)
    grid.vx[:] = rng.uniform(-1.0, 1.0, rows * columns)
    grid.vy[:] = rng.uniform(-1.0, 1.0, rows * columns)
    if consistent:
        set_bnd(grid)
    return grid


def _assert_walls(vx, vy):
    # edges exclude corners
    np.testing.assert_array_equal(vx[0, 1:-1], vx[1, 1:-1])
    np.testing.assert_array_equal(vy[0, 1:-1], -vy[1, 1:-1])
    np.testing.assert_array_equal(vx[-1, 1:-1], vx[-2, 1:-1])
    np.testing.assert_array_equal(vy[-1, 1:-1], -vy[-2, 1:-1])
    np.testing.assert_array_equal(vx[1:-1, 0], -vx[1:-1, 1])
    np.testing.assert_array_equal(vy[1:-1, 0], vy[1:-1, 1])
    np.testing.assert_array_equal(vx[1:-1, -1], -vx[1:-1, -2])
    np.testing.assert_array_equal(vy[1:-1, -1], vy[1:-1, -2])
    for v in (vx, vy):
        assert v[0, 0] == v[0, -1] == v[-1, 0] == v[-1, -1] == 0.0


@pytest.fixture
def random_grid():
    return _random_grid


@pytest.fixture
def assert_walls():
    return _assert_walls
