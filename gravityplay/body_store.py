"""Authoritative, capacity-bounded registry of simulated bodies."""
import logging
import math

import numpy as np

from . import constants as C
from .errors import CapacityError, ValidationError
from .physics import Body, as_vector3

logger = logging.getLogger(__name__)


def _finite_vector(name, value):
    try:
        v = as_vector3(value)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"{name} must be a numeric vector: {exc}") from None
    if not np.all(np.isfinite(v)):
        raise ValidationError(f"{name} must be finite, got {v.tolist()}")
    return v


class BodyStore:
    """Owns the body list, keyed by stable, monotonically assigned ids.

    Removal is soft: :meth:`remove` only clears ``alive`` so that indices held
    by a pass in progress stay valid.  :meth:`compact` drops dead entries once
    per tick and preserves order, so iteration order is ascending id order.
    """

    def __init__(self, max_bodies=C.MAX_BODIES):
        self.max_bodies = int(max_bodies)
        self._bodies = []
        self._by_id = {}
        self._next_id = 0

    def add(self, kind, mass, position, velocity=(0.0, 0.0, 0.0), color=None):
        """Add a body and return its id.

        Raises
        ------
        ValidationError
            Unknown kind, non-finite vectors or a mass that is not a finite
            positive number. The store is left untouched.
        CapacityError
            The live population has reached ``max_bodies``.
        """
        if kind not in C.BODY_TYPES:
            raise ValidationError(f"unknown body kind {kind!r}")
        try:
            mass = float(mass)
        except (TypeError, ValueError):
            raise ValidationError(f"mass must be a number, got {mass!r}") from None
        if not math.isfinite(mass) or mass <= 0:
            raise ValidationError(f"mass must be finite and positive, got {mass!r}")
        pos = _finite_vector("position", position)
        vel = _finite_vector("velocity", velocity)
        if self.count() >= self.max_bodies:
            raise CapacityError(self.max_bodies)

        body = Body(self._next_id, kind, mass, pos, vel, color=color)
        self._next_id += 1
        self._bodies.append(body)
        self._by_id[body.id] = body
        return body.id

    def remove(self, body_id):
        body = self._by_id.get(body_id)
        if body is not None:
            body.alive = False

    def clear(self):
        self._bodies = []
        self._by_id = {}

    def get(self, body_id):
        """Return the body with ``body_id`` (dead bodies stay visible until compaction)."""
        try:
            return self._by_id[body_id]
        except KeyError:
            raise KeyError(f"no body with id {body_id}") from None

    def alive_bodies(self):
        return [b for b in self._bodies if b.alive]

    def count(self):
        return sum(1 for b in self._bodies if b.alive)

    def room(self):
        return max(0, self.max_bodies - self.count())

    def compact(self):
        """Drop dead bodies and return their ids."""
        removed = [b.id for b in self._bodies if not b.alive]
        if removed:
            self._bodies = [b for b in self._bodies if b.alive]
            for body_id in removed:
                del self._by_id[body_id]
            logger.debug("compacted %d dead bodies", len(removed))
        return removed

    def __contains__(self, body_id):
        return body_id in self._by_id

    def __iter__(self):
        return iter(self._bodies)

    def __len__(self):
        return len(self._bodies)
