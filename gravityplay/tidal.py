"""Roche-limit fragmentation of bodies passing too close to a heavy neighbour."""
import logging

import numpy as np

from . import constants as C
from .events import DisruptionEvent

logger = logging.getLogger(__name__)


def roche_distance(disruptor_radius, disruptor_mass, body_mass, roche_factor=C.ROCHE_FACTOR):
    return disruptor_radius * roche_factor * (disruptor_mass / body_mass) ** (1.0 / 3.0)


def fragment_count(mass):
    pieces = int(mass // C.FRAGMENT_MASS_UNIT)
    return min(C.MAX_FRAGMENTS, max(C.MIN_FRAGMENTS, pieces))


def find_roche_violations(bodies, roche_factor=C.ROCHE_FACTOR, min_breakup_mass=C.MIN_BREAKUP_MASS):
    """Return ``(body, disruptor)`` pairs for bodies inside a Roche limit.

    Black holes never break up.  Candidate disruptors must be at least
    ``DISRUPTOR_MASS_RATIO`` times heavier; they are scanned in store order
    (ascending id) and the first that qualifies is reported.
    """
    live = [b for b in bodies if b.alive]
    if len(live) < 2:
        return []
    positions = np.array([b.pos for b in live], dtype=float)
    masses = np.array([b.mass for b in live], dtype=float)
    radii = np.array([b.radius for b in live], dtype=float)

    flagged = []
    for i, body in enumerate(live):
        if body.kind == "blackhole" or body.mass <= min_breakup_mass:
            continue
        heavy = masses >= body.mass * C.DISRUPTOR_MASS_RATIO
        heavy[i] = False
        if not heavy.any():
            continue
        dist = np.linalg.norm(positions - positions[i], axis=1)
        limit = radii * roche_factor * np.cbrt(masses / body.mass)
        inside = heavy & (dist < limit)
        if inside.any():
            flagged.append((body, live[int(np.argmax(inside))]))
    return flagged


def resolve_tidal_breakups(
    store,
    roche_factor=C.ROCHE_FACTOR,
    min_breakup_mass=C.MIN_BREAKUP_MASS,
    rng=None,
    time=0.0,
):
    """Break up every body caught inside a qualifying Roche limit.

    Each flagged body is replaced by ``3..8`` ``debris`` fragments of equal
    mass scattered around its position, carrying its velocity plus a small
    random kick.  A breakup that would not fit in the store is skipped.
    Fragments created here are not examined again until the next tick.

    Returns
    -------
    list of DisruptionEvent
    """
    if rng is None:
        rng = np.random.default_rng()
    events = []
    for body, disruptor in find_roche_violations(store, roche_factor, min_breakup_mass):
        if not body.alive:
            continue
        pieces = fragment_count(body.mass)
        if store.room() + 1 < pieces:
            logger.warning(
                "skipping breakup of body %d: no room for %d fragments", body.id, pieces
            )
            continue

        piece_mass = body.mass / pieces
        spread = body.radius * C.FRAGMENT_SPREAD
        body.alive = False
        fragment_ids = []
        for _ in range(pieces):
            offset = (rng.random(3) - 0.5) * spread
            kick = (rng.random(3) - 0.5) * C.FRAGMENT_KICK
            fragment_ids.append(
                store.add("debris", piece_mass, body.pos + offset, body.vel + kick)
            )
        logger.debug(
            "body %d torn apart by body %d into %d fragments",
            body.id,
            disruptor.id,
            pieces,
        )
        events.append(
            DisruptionEvent(
                position=tuple(float(x) for x in body.pos),
                mass=body.mass,
                color=C.DISRUPTION_COLOR,
                body_id=body.id,
                disruptor_id=disruptor.id,
                fragment_ids=tuple(fragment_ids),
                time=time,
            )
        )
    return events
