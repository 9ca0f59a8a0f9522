import numpy as np
import pytest

from stable_fluids.grid import GridState


def test_flat_buffers_are_row_major():
    grid = GridState(4, 5)
    grid.set_density(2, 3, 0.7)
    assert grid.density[2 * 5 + 3] == 0.7
    assert grid.density2d[2, 3] == 0.7
    assert grid.density2d.base is grid.density


def test_velocity_accessors():
    grid = GridState(4, 5)
    grid.set_velocity(1, 4, (0.5, -2.0))
    assert grid.get_velocity(1, 4) == (0.5, -2.0)
    assert grid.vx2d[1, 4] == 0.5
    assert grid.vy2d[1, 4] == -2.0


@pytest.mark.parametrize("row,col", [(-1, 0), (4, 0), (0, 5), (0, -1)])
def test_out_of_range_access_raises(row, col):
    grid = GridState(4, 5)
    with pytest.raises(IndexError):
        grid.get_density(row, col)


def test_snapshot_copies_without_aliasing(random_grid):
    grid = random_grid()
    grid.snapshot()
    np.testing.assert_array_equal(grid.previous_density, grid.density)
    grid.density[:] = 0.0
    assert grid.previous_density.any()
    assert not np.shares_memory(grid.previous_vx, grid.vx)


def test_fill_clear_and_copy():
    grid = GridState(3, 3)
    grid.fill(0.2, (0.0, 1.0))
    assert np.all(grid.density == 0.2)
    assert np.all(grid.vy == 1.0)

    other = grid.copy()
    grid.clear()
    assert not grid.density.any() and not grid.vy.any()
    assert np.all(other.density == 0.2)


def test_cell_geometry():
    grid = GridState(3, 4, cell_size=2.0)
    assert grid.cell_center(1, 2) == (5.0, 3.0)
    cx, cy = grid.cell_centers()
    assert cx.shape == (3, 4)
    assert (cx[1, 2], cy[1, 2]) == (5.0, 3.0)
    assert grid.world_to_cell(5.0, 3.0) == (1, 2)
    assert grid.world_to_cell(7.99, 5.99) == (2, 3)
    assert grid.world_to_cell(8.0, 0.0) is None
    assert grid.world_to_cell(-0.1, 0.0) is None
