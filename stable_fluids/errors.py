class ConfigurationError(ValueError):
    """Raised when a solver is configured with values it cannot run with."""


class InvariantViolation(RuntimeError):
    """Raised when the solver detects an internal inconsistency.

    This is never the caller's fault; it means a numerical pass produced
    an index or value the algorithm guarantees cannot happen.
    """
