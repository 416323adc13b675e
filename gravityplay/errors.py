"""Exception types raised by the simulation core."""


class SandboxError(Exception):
    """Base class for all sandbox errors."""


class ValidationError(SandboxError, ValueError):
    """A body or option was given an invalid value."""


class ConfigError(ValidationError):
    """Raised when a :class:`~gravityplay.config.SimulationConfig` is invalid."""


class CapacityError(SandboxError):
    """The body store is full.

    This is an expected, recoverable condition: callers may simply drop the
    placement or remove bodies and try again.
    """

    def __init__(self, max_bodies):
        super().__init__(f"body limit of {max_bodies} reached")
        self.max_bodies = max_bodies
