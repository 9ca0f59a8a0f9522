# Edge conditions for a closed box: reflecting walls for momentum,
# zero-gradient (open) walls for the transported scalar.
#
# All functions take (rows, columns) views and write border cells only.


def set_density_bnd(d):
    d[0, 1:-1] = d[1, 1:-1]       # bottom
    d[-1, 1:-1] = d[-2, 1:-1]     # top
    d[1:-1, 0] = d[1:-1, 1]       # left
    d[1:-1, -1] = d[1:-1, -2]     # right

    # Corners have no single interior neighbour
    d[0, 0] = 0.5 * (d[1, 0] + d[0, 1])
    d[0, -1] = 0.5 * (d[1, -1] + d[0, -2])
    d[-1, 0] = 0.5 * (d[-2, 0] + d[-1, 1])
    d[-1, -1] = 0.5 * (d[-2, -1] + d[-1, -2])


def set_velocity_bnd(vx, vy):
    # Bottom / top: vertical component is normal
    vx[0, 1:-1] = vx[1, 1:-1]
    vy[0, 1:-1] = -vy[1, 1:-1]
    vx[-1, 1:-1] = vx[-2, 1:-1]
    vy[-1, 1:-1] = -vy[-2, 1:-1]

    # Left / right: horizontal component is normal
    vx[1:-1, 0] = -vx[1:-1, 1]
    vy[1:-1, 0] = vy[1:-1, 1]
    vx[1:-1, -1] = -vx[1:-1, -2]
    vy[1:-1, -1] = vy[1:-1, -2]

    for v in (vx, vy):
        v[0, 0] = v[0, -1] = v[-1, 0] = v[-1, -1] = 0.0


def set_bnd(grid):
    """Apply the full boundary policy to a grid's live density and velocity."""
    set_density_bnd(grid.density2d)
    set_velocity_bnd(grid.vx2d, grid.vy2d)


def mirror_bnd(x):
    """Neumann edges for divergence / pressure. Corners are never read."""
    x[1:-1, 0] = x[1:-1, 1]
    x[1:-1, -1] = x[1:-1, -2]
    x[0, 1:-1] = x[1, 1:-1]
    x[-1, 1:-1] = x[-2, 1:-1]
