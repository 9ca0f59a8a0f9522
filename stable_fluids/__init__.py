"""2D stable-fluids solver on a fixed regular grid."""
from .errors import ConfigurationError, InvariantViolation
from .forcing import DENSITY, VELOCITY, BrushEvent, BrushQueue
from .grid import GridState
from .params import JACOBI, LEXICOGRAPHIC, RED_BLACK, Params
from .solver import Diagnostics, FluidSolver, reference_scene

__version__ = "0.1.0"
