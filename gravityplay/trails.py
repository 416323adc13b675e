"""Bounded per-body position history for trail rendering."""
from collections import deque

import numpy as np

from . import constants as C


class TrailRecorder:
    """Keeps the last ``max_trail_length`` positions of every live body.

    Purely observational: the physics never reads trails back.
    """

    def __init__(self, max_trail_length=C.TRAIL_LENGTH):
        self.max_trail_length = self._clamp(max_trail_length)
        self._trails = {}

    @staticmethod
    def _clamp(length):
        return max(C.MIN_TRAIL_LENGTH, min(int(length), C.MAX_TRAIL_LENGTH))

    def record(self, bodies):
        for body in bodies:
            if not body.alive:
                continue
            trail = self._trails.get(body.id)
            if trail is None:
                trail = self._trails[body.id] = deque(maxlen=self.max_trail_length)
            trail.append(tuple(float(x) for x in body.pos))

    def trail(self, body_id):
        """Oldest-first positions of ``body_id`` as an ``(n, 3)`` array."""
        points = self._trails.get(body_id, ())
        return np.array(points, dtype=float).reshape(-1, 3)

    def forget(self, body_ids):
        for body_id in body_ids:
            self._trails.pop(body_id, None)

    def clear(self):
        self._trails.clear()

    def set_trail_length(self, length):
        self.max_trail_length = self._clamp(length)
        for body_id, trail in self._trails.items():
            self._trails[body_id] = deque(trail, maxlen=self.max_trail_length)

    def __contains__(self, body_id):
        return body_id in self._trails

    def __len__(self):
        return len(self._trails)
