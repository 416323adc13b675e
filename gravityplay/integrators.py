import numpy as np


def velocity_verlet_step_arrays(
    positions,
    velocities,
    dt,
    accel_fn,
    accelerations=None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Advance one velocity-Verlet (kick-drift-kick) step.

    Parameters
    ----------
    positions, velocities : ndarray, shape (n, 3)
    dt : float
        Step size.
    accel_fn : callable
        ``accel_fn(positions) -> accelerations``; called once at the new
        positions, and once more at the start when ``accelerations`` is not
        supplied.
    accelerations : ndarray, optional
        Accelerations at ``positions``.

    Returns
    -------
    tuple
        New positions, velocities and the accelerations at the new positions.
    """
    if accelerations is None:
        accelerations = accel_fn(positions)

    # half kick
    vel_half = velocities + accelerations * (dt / 2.0)

    # full drift
    pos_new = positions + vel_half * dt

    # half kick
    accel_new = accel_fn(pos_new)
    vel_new = vel_half + accel_new * (dt / 2.0)

    return pos_new, vel_new, accel_new
