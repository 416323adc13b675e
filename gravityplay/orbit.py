"""Throwaway forward integration used to draw a predicted orbit."""
import numpy as np

from . import constants as C
from .physics import as_vector3


def predict_orbit(
    position,
    velocity,
    attractor_positions,
    attractor_masses,
    g_constant=C.G_DEFAULT,
    softening=C.SOFTENING_LENGTH,
    dt=C.TIME_STEP_BASE * C.ORBIT_PREDICTION_DT_FACTOR,
    steps=C.ORBIT_PREDICTION_STEPS,
):
    """Integrate a single test particle through a frozen field of attractors.

    The attractors never move; the particle is advanced with semi-implicit
    Euler.  The first point of the returned ``(steps, 3)`` polyline is the
    starting position.  Inputs are copied, never modified.
    """
    pos = as_vector3(position)
    vel = as_vector3(velocity)
    attractors = np.asarray(attractor_positions, dtype=float).reshape(-1, 3)
    masses = np.asarray(attractor_masses, dtype=float).reshape(-1)
    eps_sq = softening * softening

    steps = max(0, int(steps))
    path = np.empty((steps, 3), dtype=float)
    for s in range(steps):
        path[s] = pos
        if len(masses):
            delta = attractors - pos
            dist_sq = np.einsum("ij,ij->i", delta, delta) + eps_sq
            with np.errstate(divide="ignore", invalid="ignore"):
                factor = g_constant * masses / (dist_sq * np.sqrt(dist_sq))
            factor[~np.isfinite(factor)] = 0.0
            acc = factor @ delta
        else:
            acc = np.zeros(3)
        vel = vel + acc * dt
        pos = pos + vel * dt
    return path
