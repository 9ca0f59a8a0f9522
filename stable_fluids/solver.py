import logging
from dataclasses import dataclass

import numpy as np

from .advection import advect
from .diffusion import diffuse
from .errors import ConfigurationError
from .forcing import force
from .grid import GridState
from .params import Params, validate_dt
from .projection import max_divergence, project

logger = logging.getLogger(__name__)


@dataclass
class Diagnostics:
    tick: int
    time: float
    total_density: float
    min_density: float
    max_density: float
    max_speed: float
    max_divergence: float


class FluidSolver:
    """
    Stable-fluids solver on a fixed rows x columns grid.

    One call to :meth:`step` runs
    force -> diffuse -> project -> advect -> project
    on the live grid. ``emitters`` is the steady source field; brush events
    come from the ``brush_source`` callable (queried once per tick) and from
    the ``events`` argument of :meth:`step`.
    """

    def __init__(self, params: Params = None, brush_source=None):
        self.params = (params or Params()).validate()
        p = self.params
        self.grid = GridState(p.rows, p.columns, p.cell_size)
        self.emitters = GridState(p.rows, p.columns, p.cell_size)
        self.brush_source = brush_source
        self.tick = 0
        self.time = 0.0
        self._density_out_of_range = False
        logger.info(
            "fluid solver %dx%d (cell %.3g): diffusion=%.3g iterations=%d "
            "forcing=%.3g order=%s",
            p.rows, p.columns, p.cell_size, p.diffusion_rate,
            p.relaxation_iterations, p.forcing_rate, p.relaxation_order,
        )

    # ---- Read-only views for display ----
    @property
    def rows(self):
        return self.grid.rows

    @property
    def columns(self):
        return self.grid.columns

    @property
    def cell_size(self):
        return self.grid.cell_size

    @property
    def density(self):
        view = self.grid.density2d.view()
        view.flags.writeable = False
        return view

    @property
    def velocity(self):
        vx = self.grid.vx2d.view()
        vy = self.grid.vy2d.view()
        vx.flags.writeable = False
        vy.flags.writeable = False
        return vx, vy

    # ---- Setup ----
    def add_emitter(self, row, col, density=None, velocity=None):
        """Set the emitter target of one cell. Fields left as None keep their value."""
        if density is not None:
            self.emitters.set_density(row, col, density)
        if velocity is not None:
            self.emitters.set_velocity(row, col, velocity)

    def reset(self):
        self.grid.clear()
        self.tick = 0
        self.time = 0.0
        self._density_out_of_range = False

    # ---- Steps ----
    def add_sources(self, dt, events=()):
        force(self.grid, self.emitters, dt, self.params, events)

    def diffuse(self, dt):
        p = self.params
        diffuse(self.grid, dt, p.diffusion_rate, p.relaxation_iterations, p.relaxation_order)

    def project(self):
        project(self.grid, self.params.relaxation_iterations, self.params.relaxation_order)

    def advect(self, dt):
        advect(self.grid, dt)

    def step(self, dt, events=()):
        dt = validate_dt(dt)
        batch = list(events)
        if self.brush_source is not None:
            batch.extend(self.brush_source())

        self.add_sources(dt, batch)
        self.diffuse(dt)
        self.project()
        self.advect(dt)
        self.project()

        self.tick += 1
        self.time += dt
        self._check_health()

    # ---- Diagnostics ----
    def diagnostics(self) -> Diagnostics:
        g = self.grid
        return Diagnostics(
            tick=self.tick,
            time=self.time,
            total_density=float(g.density.sum()),
            min_density=float(g.density.min()),
            max_density=float(g.density.max()),
            max_speed=float(np.hypot(g.vx, g.vy).max()),
            max_divergence=max_divergence(g.vx2d, g.vy2d),
        )

    def _check_health(self):
        g = self.grid
        if not (np.isfinite(g.density).all() and np.isfinite(g.vx).all() and np.isfinite(g.vy).all()):
            logger.warning("tick %d: non-finite values in the grid; dt may be too large", self.tick)
            return
        lo, hi = g.density.min(), g.density.max()
        out_of_range = lo < 0.0 or hi > 1.0
        # warn when the excursion starts, not on every tick it lasts
        if out_of_range and not self._density_out_of_range:
            logger.warning(
                "tick %d: density outside [0, 1] (min %.3g, max %.3g)", self.tick, lo, hi
            )
        self._density_out_of_range = out_of_range
        logger.debug("tick %d done, t=%.4g", self.tick, self.time)


def reference_scene(params=None, brush_source=None):
    """
    The stock scene: every cell drifting upward at unit speed and one
    density emitter (target 0.8) at cell (5, 5).
    """
    solver = FluidSolver(params, brush_source)
    if solver.rows < 6 or solver.columns < 6:
        raise ConfigurationError(
            f"the reference scene needs at least 6x6 cells, got {solver.rows}x{solver.columns}"
        )
    solver.grid.fill(0.0, (0.0, 1.0))
    solver.add_emitter(5, 5, density=0.8)
    return solver
