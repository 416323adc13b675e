"""The simulation facade driven once per animation tick."""
import logging

import numpy as np

from . import constants as C
from .body_store import BodyStore
from .collisions import resolve_collisions
from .config import SimulationConfig
from .errors import CapacityError
from .events import EventBus
from .forces import compute_accelerations
from .integrators import velocity_verlet_step_arrays
from .orbit import predict_orbit
from .physics import calculate_center_of_mass, system_energy, total_momentum
from .presets import load_preset
from .tidal import resolve_tidal_breakups
from .trails import TrailRecorder

logger = logging.getLogger(__name__)


class Simulation:
    """Interactive n-body sandbox.

    All mutation happens inside :meth:`step` in a fixed phase order:
    forces, velocity Verlet, collisions, tidal breakup, trails, compaction.
    Callers get plain data back: snapshots, trails and events.
    """

    def __init__(self, config=None):
        self.config = config if config is not None else SimulationConfig()
        self.store = BodyStore(self.config.max_bodies)
        self.trails = TrailRecorder(self.config.trail_length)
        self.events = EventBus()
        self.rng = np.random.default_rng(self.config.seed)
        self.time = 0.0
        self.tick_count = 0

    # ------------------------------------------------------------------
    def configure(self, **changes):
        """Replace configuration options between ticks.

        A ``max_bodies`` below the live population raises
        :class:`~gravityplay.errors.CapacityError` and leaves the
        configuration unchanged.
        """
        config = self.config.replace(**changes)
        if config.max_bodies < self.store.count():
            raise CapacityError(config.max_bodies)
        self.config = config
        self.store.max_bodies = self.config.max_bodies
        if self.trails.max_trail_length != self.config.trail_length:
            self.trails.set_trail_length(self.config.trail_length)
        if "seed" in changes:
            self.rng = np.random.default_rng(self.config.seed)
        return self.config

    def add_body(self, kind, mass, position, velocity=(0.0, 0.0, 0.0), color=None):
        """Place a body and return its id.

        Planets without an explicit colour draw one from the planet palette.
        Raises :class:`~gravityplay.errors.ValidationError` or
        :class:`~gravityplay.errors.CapacityError`.
        """
        if color is None and kind == "planet":
            color = C.PLANET_COLORS[int(self.rng.integers(len(C.PLANET_COLORS)))]
        return self.store.add(kind, mass, position, velocity, color=color)

    def remove_body(self, body_id):
        self.store.remove(body_id)

    def clear_all(self):
        self.store.clear()
        self.trails.clear()
        self.events.clear()

    def alive_bodies(self):
        return [b.snapshot() for b in self.store.alive_bodies()]

    def get(self, body_id):
        return self.store.get(body_id).snapshot()

    def count(self):
        return self.store.count()

    def trail(self, body_id):
        return self.trails.trail(body_id)

    # ------------------------------------------------------------------
    def _accelerations(self, positions, masses):
        cfg = self.config
        return compute_accelerations(
            positions,
            masses,
            cfg.gravitational_constant,
            cfg.softening_length,
            cfg.opening_angle,
            cfg.direct_sum_threshold,
        )

    def step(self, dt=None):
        """Advance the simulation by one tick and return the tick's events.

        ``dt`` defaults to ``base_timestep * time_scale``.
        """
        cfg = self.config
        if dt is None:
            dt = cfg.timestep
        bodies = self.store.alive_bodies()
        events = []
        if bodies:
            positions = np.array([b.pos for b in bodies], dtype=float)
            velocities = np.array([b.vel for b in bodies], dtype=float)
            masses = np.array([b.mass for b in bodies], dtype=float)

            def accel_fn(pos):
                return self._accelerations(pos, masses)

            new_pos, new_vel, new_acc = velocity_verlet_step_arrays(
                positions, velocities, dt, accel_fn
            )
            for i, body in enumerate(bodies):
                body.update_physics_state(new_pos[i], new_vel[i], new_acc[i])

            self.time += dt
            events.extend(resolve_collisions(self.store, time=self.time))
            events.extend(
                resolve_tidal_breakups(
                    self.store,
                    cfg.roche_factor,
                    cfg.min_breakup_mass,
                    rng=self.rng,
                    time=self.time,
                )
            )
            self.trails.record(self.store)
            for body in self.store:
                if body.alive:
                    body.age += dt
        else:
            self.time += dt
        self.trails.forget(self.store.compact())
        self.tick_count += 1
        if events:
            logger.debug("tick %d: %d events", self.tick_count, len(events))
            self.events.publish(events)
        return events

    def run(self, ticks, dt=None):
        """Call :meth:`step` ``ticks`` times and return every event emitted."""
        events = []
        for _ in range(int(ticks)):
            events.extend(self.step(dt))
        return events

    # ------------------------------------------------------------------
    def predict_orbit(self, body_id, horizon_steps=C.ORBIT_PREDICTION_STEPS):
        """Predicted path of ``body_id`` with every other body frozen in place."""
        body = self.store.get(body_id)
        if not body.alive:
            return np.zeros((0, 3), dtype=float)
        others = [b for b in self.store.alive_bodies() if b.id != body_id]
        cfg = self.config
        return predict_orbit(
            body.pos,
            body.vel,
            [b.pos for b in others],
            [b.mass for b in others],
            g_constant=cfg.gravitational_constant,
            softening=cfg.softening_length,
            dt=cfg.base_timestep * C.ORBIT_PREDICTION_DT_FACTOR,
            steps=horizon_steps,
        )

    def energy(self):
        """``(kinetic, potential, total)`` of the live system."""
        return system_energy(
            self.store, self.config.gravitational_constant, self.config.softening_length
        )

    def center_of_mass(self):
        return calculate_center_of_mass(self.store)

    def momentum(self):
        return total_momentum(self.store)

    def subscribe(self, callback):
        return self.events.subscribe(callback)

    def drain_events(self):
        return self.events.drain()

    def load_preset(self, preset_name):
        load_preset(self, preset_name)
