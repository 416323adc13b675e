"""Perfectly inelastic merging of overlapping bodies."""
import logging

import numpy as np

from . import constants as C
from .events import CollisionEvent, blend_color

logger = logging.getLogger(__name__)


def find_overlapping_pairs(bodies):
    """Return every overlapping ``(a, b)`` pair of live bodies.

    Pairs are listed in scan order (``a`` before ``b`` in ``bodies``), and
    are all collected before anything is mutated.
    """
    live = [b for b in bodies if b.alive]
    n = len(live)
    if n < 2:
        return []
    positions = np.array([b.pos for b in live], dtype=float)
    radii = np.array([b.radius for b in live], dtype=float)

    pairs = []
    for i in range(n - 1):
        delta = positions[i + 1:] - positions[i]
        dist_sq = np.einsum("ij,ij->i", delta, delta)
        reach = radii[i + 1:] + radii[i]
        for j in np.nonzero(dist_sq < reach * reach)[0]:
            pairs.append((live[i], live[i + 1 + int(j)]))
    return pairs


def pick_survivor(a, b):
    """Higher mass survives; on equal mass the lower id survives."""
    if a.mass > b.mass or (a.mass == b.mass and a.id < b.id):
        return a, b
    return b, a


def merge_bodies(survivor, absorbed):
    """Fold ``absorbed`` into ``survivor``, conserving mass and momentum."""
    total_mass = survivor.mass + absorbed.mass
    new_vel = (survivor.vel * survivor.mass + absorbed.vel * absorbed.mass) / total_mass
    new_pos = (survivor.pos * survivor.mass + absorbed.pos * absorbed.mass) / total_mass
    survivor.mass = total_mass
    survivor.update_physics_state(new_pos, new_vel)
    absorbed.alive = False


def resolve_collisions(bodies, time=0.0):
    """Detect and merge overlapping bodies.

    Parameters
    ----------
    bodies : iterable of Body
        All bodies of the store, live or dead, in store order.
    time : float
        Simulation clock value stamped on the emitted events.

    Returns
    -------
    list of CollisionEvent
        One event per merge performed.
    """
    events = []
    for a, b in find_overlapping_pairs(bodies):
        # a body absorbed earlier in this pass takes no further part
        if not (a.alive and b.alive):
            continue
        survivor, absorbed = pick_survivor(a, b)
        mid = (survivor.pos + absorbed.pos) * 0.5
        color = blend_color(survivor.color, C.COLLISION_FLASH_COLOR, C.COLLISION_FLASH_BLEND)
        merge_bodies(survivor, absorbed)
        logger.debug(
            "body %d absorbed body %d (mass now %.3g)", survivor.id, absorbed.id, survivor.mass
        )
        events.append(
            CollisionEvent(
                position=tuple(float(x) for x in mid),
                combined_mass=survivor.mass,
                color=color,
                survivor_id=survivor.id,
                absorbed_id=absorbed.id,
                time=time,
            )
        )
    return events
