import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


DENSITY = "density"
VELOCITY = "velocity"


@dataclass(frozen=True)
class BrushEvent:
    """One pointer interaction reported by the input layer between ticks."""
    point: Tuple[float, float]      # world-space (x, y)
    kind: str = DENSITY             # DENSITY or VELOCITY
    radius: Optional[float] = None  # None -> solver default

    def __post_init__(self):
        if self.kind not in (DENSITY, VELOCITY):
            raise ValueError(f"unknown brush kind {self.kind!r}")
        if self.radius is not None and self.radius <= 0:
            raise ValueError(f"brush radius must be positive, got {self.radius!r}")


class BrushQueue:
    """
    Collects brush events between ticks. Pass it as a solver's
    ``brush_source``; each tick drains whatever was pushed since the last one.
    """
    def __init__(self):
        self._pending = []

    def push(self, event: BrushEvent) -> None:
        self._pending.append(event)

    def density(self, x, y, radius=None) -> None:
        self.push(BrushEvent((x, y), DENSITY, radius))

    def velocity(self, x, y, radius=None) -> None:
        self.push(BrushEvent((x, y), VELOCITY, radius))

    def __len__(self):
        return len(self._pending)

    def __call__(self):
        events, self._pending = self._pending, []
        return events


# ---- Emitters ----
def add_emitter_sources(grid, emitters, dt, rate, cap_at_target=False):
    """
    Nudge live cells toward the steady emitter field.

    A cell gains ``emitter * dt * rate`` whenever its pre-update value is
    below the emitter target (velocity compared by magnitude). The check does
    not look at the result, so a cell can end a tick above its target; with
    ``cap_at_target`` the increment is trimmed to land on the target instead.
    """
    k = dt * rate

    d, ed = grid.density, emitters.density
    below = ed > d
    if below.any():
        d[below] += ed[below] * k
        if cap_at_target:
            np.minimum(d, ed, out=d, where=below)

    speed = np.hypot(grid.vx, grid.vy)
    target = np.hypot(emitters.vx, emitters.vy)
    slow = target > speed
    if slow.any():
        grid.vx[slow] += emitters.vx[slow] * k
        grid.vy[slow] += emitters.vy[slow] * k
        if cap_at_target:
            new_speed = np.hypot(grid.vx, grid.vy)
            over = slow & (new_speed > target)
            scale = target[over] / new_speed[over]
            grid.vx[over] *= scale
            grid.vy[over] *= scale

    return int(below.sum()), int(slow.sum())


# ---- Brush ----
def apply_brush(grid, event, radius, density_step, velocity_gain):
    """
    Apply one brush event directly to the live grid. Returns the number of
    cells touched.

    Cells whose center lies strictly inside ``radius`` of the point are
    affected: a density brush adds ``density_step`` clamped to [0, 1]; a
    velocity brush sets the velocity to ``velocity_gain * (point - center)``.
    """
    if event.radius is not None:
        radius = event.radius
    px, py = event.point
    cx, cy = grid.cell_centers()
    dx = px - cx
    dy = py - cy
    hit = (np.hypot(dx, dy) < radius).ravel()
    if not hit.any():
        return 0

    if event.kind == DENSITY:
        grid.density[hit] = np.clip(grid.density[hit] + density_step, 0.0, 1.0)
    else:
        grid.vx[hit] = velocity_gain * dx.ravel()[hit]
        grid.vy[hit] = velocity_gain * dy.ravel()[hit]
    return int(hit.sum())


def force(grid, emitters, dt, params, events=()):
    """Emitter catch-up followed by this tick's brush events."""
    nd, nv = add_emitter_sources(
        grid, emitters, dt, params.forcing_rate, params.cap_emitters_at_target
    )
    touched = 0
    for event in events:
        touched += apply_brush(
            grid, event,
            params.effective_brush_radius,
            params.brush_density_step,
            params.brush_velocity_gain,
        )
    logger.debug(
        "force: %d density / %d velocity emitters fired, %d brush cells",
        nd, nv, touched,
    )
