import csv
import os
from collections import deque

import numpy as np

from . import constants as C
from .physics import system_energy


class EnergyMonitor:
    """Track relative drift of the total system energy."""

    def __init__(self, max_points=500):
        self.history = deque(maxlen=max_points)
        self.initial_energy = None

    def set_initial_energy(self, bodies, g_constant, softening=0.0):
        _, _, self.initial_energy = system_energy(bodies, g_constant, softening)
        self.history.clear()

    def update(self, bodies, g_constant, softening=0.0):
        if self.initial_energy is None or abs(self.initial_energy) < 1e-12:
            return
        _, _, current_energy = system_energy(bodies, g_constant, softening)
        drift = ((current_energy - self.initial_energy) / self.initial_energy) * 100
        self.history.append(drift)

    def max_drift(self):
        return max((abs(d) for d in self.history), default=0.0)

    def export_csv(self, file, delimiter=","):
        """Export the recorded energy drift history to a CSV file.

        Parameters
        ----------
        file : str or file-like
            Destination filename or open file object.
        delimiter : str, optional
            Delimiter used between columns (default is ',').
        """
        close = False
        if isinstance(file, (str, bytes, os.PathLike)):
            f = open(file, "w", newline="")
            close = True
        else:
            f = file
        try:
            writer = csv.writer(f, delimiter=delimiter)
            writer.writerow(["step", "energy_drift_percent"])
            for i, drift in enumerate(self.history):
                writer.writerow([i, drift])
        finally:
            if close:
                f.close()


def gravity_well_grid(bodies, g_constant=C.G_DEFAULT, resolution=40, size=300.0):
    """Height map of the gravity well in the ``y = 0`` plane.

    Returns a ``(resolution + 1, resolution + 1)`` array of non-positive
    depths, row ``i`` spanning ``z`` and column ``j`` spanning ``x`` over
    ``[-size/2, size/2]``.  Depths are clipped at ``-WELL_MAX_DEPTH``.
    """
    live = [b for b in bodies if b.alive]
    axis = (np.arange(resolution + 1) / resolution - 0.5) * size
    wx, wz = np.meshgrid(axis, axis)
    depth = np.zeros_like(wx)
    for b in live:
        dist_sq = (b.pos[0] - wx) ** 2 + (b.pos[2] - wz) ** 2 + C.WELL_SOFTENING_SQ
        depth -= b.mass / dist_sq * g_constant * C.WELL_DEPTH_SCALE
    return np.maximum(depth, -C.WELL_MAX_DEPTH)
