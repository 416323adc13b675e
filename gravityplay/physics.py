"""Body model and whole-system diagnostics.

The :class:`Body` class is the mutable record owned by the
:class:`~gravityplay.body_store.BodyStore`.  Code outside the core only ever
sees immutable :class:`BodySnapshot` copies.
"""
from dataclasses import dataclass

import numpy as np

from . import constants as C


def as_vector3(value):
    """Return ``value`` as a float 3-vector, zero-padding 1-D/2-D input."""
    v = np.asarray(value, dtype=float).reshape(-1)
    if v.size < 3:
        v = np.pad(v, (0, 3 - v.size))
    return v[:3].copy()


def radius_for(kind, mass):
    """Radius of a body of ``kind`` and ``mass`` from its kind's scaling law."""
    td = C.BODY_TYPES[kind]
    radius = td["base_radius"] * (mass / td["base_mass"]) ** (1.0 / 3.0)
    return max(C.MIN_RADIUS, min(radius, C.MAX_RADIUS))


@dataclass(frozen=True)
class BodySnapshot:
    """Read-only view of a body, safe to hand to renderers."""

    id: int
    kind: str
    mass: float
    radius: float
    position: tuple
    velocity: tuple
    color: tuple
    age: float
    alive: bool


class Body:
    """A simulated point mass."""

    __slots__ = ("id", "kind", "mass", "pos", "vel", "acc", "color", "alive", "age")

    def __init__(self, body_id, kind, mass, pos, vel, color=None):
        """Create a body storing position, velocity and acceleration as 3-D vectors.

        Parameters
        ----------
        body_id : int
            Stable identifier assigned by the store.
        kind : str
            Key into :data:`~gravityplay.constants.BODY_TYPES`.
        mass : float
            Positive mass in sandbox units.
        pos, vel : array-like
            Initial position and velocity. Values with fewer than three
            components are padded with zeros.
        color : tuple, optional
            RGB colour in ``0..1``; defaults to the kind's colour.
        """
        self.id = int(body_id)
        self.kind = kind
        self.mass = float(mass)
        self.pos = as_vector3(pos)
        self.vel = as_vector3(vel)
        self.acc = np.zeros(3, dtype=np.float64)
        self.color = tuple(color) if color is not None else C.BODY_TYPES[kind]["color"]
        self.alive = True
        self.age = 0.0

    @property
    def radius(self):
        return radius_for(self.kind, self.mass)

    def update_physics_state(self, new_pos, new_vel, new_acc=None):
        """Update the body's position, velocity and (optionally) acceleration."""
        self.pos = as_vector3(new_pos)
        self.vel = as_vector3(new_vel)
        if new_acc is not None:
            self.acc = as_vector3(new_acc)

    def kinetic_energy(self):
        return 0.5 * self.mass * float(np.dot(self.vel, self.vel))

    def snapshot(self):
        return BodySnapshot(
            id=self.id,
            kind=self.kind,
            mass=self.mass,
            radius=self.radius,
            position=tuple(float(x) for x in self.pos),
            velocity=tuple(float(x) for x in self.vel),
            color=self.color,
            age=self.age,
            alive=self.alive,
        )

    def __repr__(self):
        return (
            f"Body(id={self.id}, kind={self.kind!r}, mass={self.mass}, "
            f"pos={self.pos.tolist()}, vel={self.vel.tolist()}, alive={self.alive})"
        )


def system_energy(bodies, g_constant=C.G_DEFAULT, softening=0.0):
    """Return total kinetic, potential and combined energy of live bodies.

    The potential uses the same Plummer softening as the force law so that it
    is the quantity the integrator actually conserves.
    """
    live = [b for b in bodies if b.alive]
    kinetic = sum(b.kinetic_energy() for b in live)
    potential = 0.0
    if len(live) > 1:
        pos = np.array([b.pos for b in live], dtype=float)
        masses = np.array([b.mass for b in live], dtype=float)
        eps_sq = softening * softening
        for i in range(len(live) - 1):
            delta = pos[i + 1:] - pos[i]
            dist_sq = np.einsum("ij,ij->i", delta, delta) + eps_sq
            mask = dist_sq > 0
            potential -= g_constant * masses[i] * float(
                np.sum(masses[i + 1:][mask] / np.sqrt(dist_sq[mask]))
            )
    return kinetic, potential, kinetic + potential


def calculate_center_of_mass(bodies):
    """Return the centre-of-mass position and velocity of live bodies.

    Returns ``(None, None)`` when there are no live bodies.
    """
    total_mass = 0.0
    weighted_pos_sum = np.zeros(3, dtype=np.float64)
    weighted_vel_sum = np.zeros(3, dtype=np.float64)
    for body in bodies:
        if not body.alive:
            continue
        total_mass += body.mass
        weighted_pos_sum += body.pos * body.mass
        weighted_vel_sum += body.vel * body.mass
    if total_mass == 0:
        return None, None
    return weighted_pos_sum / total_mass, weighted_vel_sum / total_mass


def total_momentum(bodies):
    p = np.zeros(3, dtype=np.float64)
    for b in bodies:
        if b.alive:
            p += b.mass * b.vel
    return p
