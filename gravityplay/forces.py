"""Force evaluation: direct summation for small populations, Barnes-Hut above."""
import logging

import numpy as np

from . import constants as C
from .jit import direct_accelerations_jit
from .octree import Octree

logger = logging.getLogger(__name__)


def _as_arrays(positions, masses):
    positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 3)
    masses = np.ascontiguousarray(masses, dtype=np.float64).reshape(-1)
    return positions, masses


def direct_accelerations(positions, masses, g_constant=C.G_DEFAULT, softening=C.SOFTENING_LENGTH):
    """Exact O(n^2) softened accelerations."""
    positions, masses = _as_arrays(positions, masses)
    if len(masses) == 0:
        return np.zeros((0, 3), dtype=np.float64)
    return direct_accelerations_jit(positions, masses, float(g_constant), float(softening) ** 2)


def tree_accelerations(
    positions,
    masses,
    g_constant=C.G_DEFAULT,
    softening=C.SOFTENING_LENGTH,
    theta=C.THETA,
):
    """Barnes-Hut accelerations; the octree lives only for this call."""
    positions, masses = _as_arrays(positions, masses)
    if len(masses) == 0:
        return np.zeros((0, 3), dtype=np.float64)
    tree = Octree.build(positions, masses)
    return tree.accelerations(g_constant, theta, softening)


def compute_accelerations(
    positions: np.ndarray,
    masses: np.ndarray,
    g_constant: float = C.G_DEFAULT,
    softening: float = C.SOFTENING_LENGTH,
    theta: float = C.THETA,
    direct_sum_threshold: int = C.DIRECT_SUM_THRESHOLD,
) -> np.ndarray:
    """Acceleration on every body from all the others.

    Parameters
    ----------
    positions : ndarray, shape (n, 3)
    masses : ndarray, shape (n,)
        Live bodies only; dead bodies must be filtered out by the caller.
    direct_sum_threshold : int
        Populations up to this size use exact pairwise summation, larger
        ones the Barnes-Hut tree with opening angle ``theta``.
    """
    n = len(masses)
    if n > direct_sum_threshold:
        logger.debug("barnes-hut force pass for %d bodies (theta=%.2f)", n, theta)
        return tree_accelerations(positions, masses, g_constant, softening, theta)
    return direct_accelerations(positions, masses, g_constant, softening)
