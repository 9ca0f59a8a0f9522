import math
import numbers
from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError


LEXICOGRAPHIC = "lexicographic"
RED_BLACK = "red_black"
JACOBI = "jacobi"

RELAXATION_ORDERS = (LEXICOGRAPHIC, RED_BLACK, JACOBI)


@dataclass
class Params:
    rows: int = 10                  # grid rows, border included
    columns: int = 10               # grid columns, border included
    cell_size: float = 1.0          # world size of one cell
    diffusion_rate: float = 0.01    # shared by density and velocity
    relaxation_iterations: int = 20 # sweeps for diffusion and projection
    forcing_rate: float = 100.0     # emitter injection multiplier
    relaxation_order: str = LEXICOGRAPHIC

    cap_emitters_at_target: bool = False

    # brush input
    brush_density_step: float = 0.1
    brush_velocity_gain: float = 2.0
    brush_radius: Optional[float] = None  # None -> cell_size / 2

    @property
    def effective_brush_radius(self) -> float:
        if self.brush_radius is None:
            return self.cell_size / 2
        return self.brush_radius

    def validate(self) -> "Params":
        for name in ("rows", "columns"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
            # A grid with no interior cell has nothing to integrate.
            if value < 3:
                raise ConfigurationError(f"{name} must be at least 3, got {value}")

        if not _finite(self.cell_size) or self.cell_size <= 0:
            raise ConfigurationError(f"cell_size must be positive, got {self.cell_size!r}")

        for name in ("diffusion_rate", "forcing_rate", "brush_density_step", "brush_velocity_gain"):
            value = getattr(self, name)
            if not _finite(value) or value < 0:
                raise ConfigurationError(f"{name} must be a non-negative number, got {value!r}")

        iters = self.relaxation_iterations
        if isinstance(iters, bool) or not isinstance(iters, numbers.Integral) or iters <= 0:
            raise ConfigurationError(
                f"relaxation_iterations must be a positive integer, got {iters!r}"
            )

        if self.relaxation_order not in RELAXATION_ORDERS:
            raise ConfigurationError(
                f"relaxation_order must be one of {', '.join(RELAXATION_ORDERS)}, "
                f"got {self.relaxation_order!r}"
            )

        if self.brush_radius is not None and (not _finite(self.brush_radius) or self.brush_radius <= 0):
            raise ConfigurationError(f"brush_radius must be positive, got {self.brush_radius!r}")

        return self


def validate_dt(dt) -> float:
    if not _finite(dt) or dt < 0:
        raise ConfigurationError(f"dt must be a finite, non-negative number, got {dt!r}")
    return float(dt)


def _finite(value) -> bool:
    try:
        return math.isfinite(value)
    except TypeError:
        return False
