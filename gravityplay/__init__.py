"""Interactive n-body gravity sandbox core."""

from importlib.metadata import PackageNotFoundError, version

from .config import SimulationConfig
from .errors import CapacityError, ConfigError, SandboxError, ValidationError
from .events import CollisionEvent, DisruptionEvent
from .forces import compute_accelerations, direct_accelerations, tree_accelerations
from .octree import Octree
from .physics import Body, BodySnapshot, system_energy
from .presets import PRESETS, load_preset
from .simulation import Simulation
from .state_io import save_state, load_state

try:
    __version__ = version("gravityplay")
except PackageNotFoundError:
    # Fallback when package metadata is unavailable (e.g. running from source)
    __version__ = "0.0.0"

__all__ = [
    "Body",
    "BodySnapshot",
    "CapacityError",
    "CollisionEvent",
    "ConfigError",
    "DisruptionEvent",
    "Octree",
    "PRESETS",
    "SandboxError",
    "Simulation",
    "SimulationConfig",
    "ValidationError",
    "compute_accelerations",
    "direct_accelerations",
    "load_preset",
    "load_state",
    "save_state",
    "system_energy",
    "tree_accelerations",
    "__version__",
]
