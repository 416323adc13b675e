"""Runtime configuration for a :class:`~gravityplay.simulation.Simulation`."""

import dataclasses
import math
from dataclasses import dataclass
from typing import Optional

from . import constants as C
from .errors import ConfigError


@dataclass(frozen=True)
class SimulationConfig:
    """All externally settable simulation options.

    The dataclass is frozen; use :meth:`replace` to derive a modified copy.
    Every instance is validated on construction.
    """

    gravitational_constant: float = C.G_DEFAULT
    time_scale: float = C.TIME_SCALE
    base_timestep: float = C.TIME_STEP_BASE
    opening_angle: float = C.THETA
    direct_sum_threshold: int = C.DIRECT_SUM_THRESHOLD
    max_bodies: int = C.MAX_BODIES
    softening_length: float = C.SOFTENING_LENGTH
    roche_factor: float = C.ROCHE_FACTOR
    trail_length: int = C.TRAIL_LENGTH
    min_breakup_mass: float = C.MIN_BREAKUP_MASS
    seed: Optional[int] = None

    def __post_init__(self):
        for name in (
            "gravitational_constant",
            "time_scale",
            "base_timestep",
            "opening_angle",
            "softening_length",
            "roche_factor",
            "min_breakup_mass",
        ):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ConfigError(f"{name} must be a finite number, got {value!r}")
            if value < 0:
                raise ConfigError(f"{name} must be non-negative, got {value!r}")
        if self.base_timestep <= 0:
            raise ConfigError("base_timestep must be positive")
        if self.roche_factor <= 0:
            raise ConfigError("roche_factor must be positive")
        if int(self.max_bodies) != self.max_bodies or self.max_bodies < 1:
            raise ConfigError("max_bodies must be a positive integer")
        if int(self.direct_sum_threshold) != self.direct_sum_threshold or self.direct_sum_threshold < 0:
            raise ConfigError("direct_sum_threshold must be a non-negative integer")
        if not C.MIN_TRAIL_LENGTH <= self.trail_length <= C.MAX_TRAIL_LENGTH:
            raise ConfigError(
                f"trail_length must be within {C.MIN_TRAIL_LENGTH}..{C.MAX_TRAIL_LENGTH}"
            )

    @property
    def timestep(self) -> float:
        """Effective step size ``base_timestep * time_scale``."""
        return self.base_timestep * self.time_scale

    @property
    def softening_sq(self) -> float:
        return self.softening_length**2

    def replace(self, **changes) -> "SimulationConfig":
        unknown = set(changes) - {f.name for f in dataclasses.fields(self)}
        if unknown:
            raise ConfigError(f"unknown option(s): {', '.join(sorted(unknown))}")
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data) -> "SimulationConfig":
        return cls().replace(**dict(data))
