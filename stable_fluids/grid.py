import numpy as np


class GridState:
    """
    Live density/velocity samples for a rows x columns lattice plus the
    scratch buffers the solver steps work in.

    Each field is one flat float64 buffer indexed by ``row * columns + col``.
    The ``*2d`` attributes are (rows, columns) views over the same memory,
    so writing through either name updates the one buffer.
    """

    SCRATCH = ("previous_density", "previous_vx", "previous_vy", "divergence", "pressure")

    def __init__(self, rows: int, columns: int, cell_size: float = 1.0):
        self.rows = rows
        self.columns = columns
        self.cell_size = cell_size
        size = rows * columns

        self.density = np.zeros(size, dtype=np.float64)
        self.vx = np.zeros(size, dtype=np.float64)
        self.vy = np.zeros(size, dtype=np.float64)

        # scratch: no state survives between calls
        self.previous_density = np.zeros(size, dtype=np.float64)
        self.previous_vx = np.zeros(size, dtype=np.float64)
        self.previous_vy = np.zeros(size, dtype=np.float64)
        self.divergence = np.zeros(size, dtype=np.float64)
        self.pressure = np.zeros(size, dtype=np.float64)

        shape = (rows, columns)
        self.density2d = self.density.reshape(shape)
        self.vx2d = self.vx.reshape(shape)
        self.vy2d = self.vy.reshape(shape)
        self.previous_density2d = self.previous_density.reshape(shape)
        self.previous_vx2d = self.previous_vx.reshape(shape)
        self.previous_vy2d = self.previous_vy.reshape(shape)
        self.divergence2d = self.divergence.reshape(shape)
        self.pressure2d = self.pressure.reshape(shape)

    @property
    def shape(self):
        return (self.rows, self.columns)

    # ---- Indexing ----
    def index(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.columns):
            raise IndexError(
                f"cell ({row}, {col}) outside {self.rows}x{self.columns} grid"
            )
        return row * self.columns + col

    def get_density(self, row: int, col: int) -> float:
        return float(self.density[self.index(row, col)])

    def set_density(self, row: int, col: int, value: float) -> None:
        self.density[self.index(row, col)] = value

    def get_velocity(self, row: int, col: int):
        k = self.index(row, col)
        return float(self.vx[k]), float(self.vy[k])

    def set_velocity(self, row: int, col: int, velocity) -> None:
        k = self.index(row, col)
        self.vx[k], self.vy[k] = velocity

    # ---- Bulk operations ----
    def snapshot(self) -> None:
        """Copy the live fields into the previous_* scratch buffers."""
        np.copyto(self.previous_density, self.density)
        np.copyto(self.previous_vx, self.vx)
        np.copyto(self.previous_vy, self.vy)

    def fill(self, density: float = 0.0, velocity=(0.0, 0.0)) -> None:
        self.density.fill(density)
        self.vx.fill(velocity[0])
        self.vy.fill(velocity[1])

    def clear(self) -> None:
        for name in ("density", "vx", "vy") + self.SCRATCH:
            getattr(self, name).fill(0.0)

    def copy(self) -> "GridState":
        """Detached copy of the durable fields (scratch is not carried)."""
        other = GridState(self.rows, self.columns, self.cell_size)
        np.copyto(other.density, self.density)
        np.copyto(other.vx, self.vx)
        np.copyto(other.vy, self.vy)
        return other

    # ---- Geometry ----
    def cell_center(self, row: int, col: int):
        self.index(row, col)
        half = self.cell_size / 2
        return col * self.cell_size + half, row * self.cell_size + half

    def cell_centers(self):
        """World-space (x, y) centers of every cell as two (rows, columns) arrays."""
        half = self.cell_size / 2
        rows, cols = np.meshgrid(np.arange(self.rows), np.arange(self.columns), indexing="ij")
        return cols * self.cell_size + half, rows * self.cell_size + half

    def world_to_cell(self, x: float, y: float):
        """Cell containing a world point, or None when the point is off the grid."""
        col = int(np.floor(x / self.cell_size))
        row = int(np.floor(y / self.cell_size))
        if 0 <= row < self.rows and 0 <= col < self.columns:
            return row, col
        return None
