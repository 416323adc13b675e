"""Ready-made starting configurations.

Each builder only issues ``sim.add_body`` calls; any randomness comes from
``sim.rng`` so a seeded simulation always produces the same scene.  Orbital
speeds use the circular-orbit formula ``v = sqrt(G * M / r)``.
"""
import logging
import math

from . import constants as C

logger = logging.getLogger(__name__)


def _circular_speed(sim, central_mass, r):
    return math.sqrt(sim.config.gravitational_constant * central_mass / r)


def binary_stars(sim):
    d = 25.0
    v = math.sqrt(sim.config.gravitational_constant * 800.0 / (4.0 * d))
    sim.add_body("star", 800.0, (-d, 0.0, 0.0), (0.0, 0.0, v))
    sim.add_body("star", 800.0, (d, 0.0, 0.0), (0.0, 0.0, -v))


def solar_system(sim):
    star_mass = 3000.0
    sim.add_body("star", star_mass, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    for dist, mass in ((25.0, 20.0), (40.0, 40.0), (60.0, 80.0), (85.0, 60.0)):
        angle = sim.rng.random() * 2.0 * math.pi
        v = _circular_speed(sim, star_mass, dist)
        sim.add_body(
            "planet",
            mass,
            (math.cos(angle) * dist, 0.0, math.sin(angle) * dist),
            (-math.sin(angle) * v, 0.0, math.cos(angle) * v),
        )


def figure_eight(sim):
    # Chenciner-Montgomery three-body choreography, scaled to the sandbox
    scale = 30.0
    mass = 400.0
    vx = 0.347111 * 4.0
    vz = 0.532728 * 4.0
    sim.add_body("star", mass, (-0.97 * scale, 0.0, 0.243 * scale), (vx, 0.0, vz))
    sim.add_body("star", mass, (0.97 * scale, 0.0, -0.243 * scale), (vx, 0.0, vz))
    sim.add_body("star", mass, (0.0, 0.0, 0.0), (-2.0 * vx, 0.0, -2.0 * vz))


def _cluster(sim, cx, cz, vx, vz, count, central_mass):
    sim.add_body("blackhole", central_mass, (cx, 0.0, cz), (vx, 0.0, vz))
    rng = sim.rng
    for _ in range(count):
        angle = rng.random() * 2.0 * math.pi
        r = 10.0 + rng.random() * 50.0
        v = _circular_speed(sim, central_mass, r) * (0.8 + rng.random() * 0.4)
        sim.add_body(
            "planet",
            2.0 + rng.random() * 8.0,
            (cx + math.cos(angle) * r, (rng.random() - 0.5) * 5.0, cz + math.sin(angle) * r),
            (vx - math.sin(angle) * v, 0.0, vz + math.cos(angle) * v),
        )


def galaxy_collision(sim):
    _cluster(sim, -80.0, 0.0, 0.4, 0.1, 150, 3000.0)
    _cluster(sim, 80.0, 20.0, -0.4, -0.1, 150, 3000.0)


def lagrange_points(sim):
    star_mass = 3000.0
    planet_mass = 100.0
    d = 60.0
    v = _circular_speed(sim, star_mass, d)
    test_mass = 3.0

    sim.add_body("star", star_mass, (0.0, 0.0, 0.0), (0.0, 0.0, 0.0))
    sim.add_body("planet", planet_mass, (d, 0.0, 0.0), (0.0, 0.0, v))

    def on_circle(angle, r, mass):
        speed = _circular_speed(sim, star_mass, r)
        sim.add_body(
            "asteroid",
            mass,
            (math.cos(angle) * r, 0.0, math.sin(angle) * r),
            (-math.sin(angle) * speed, 0.0, math.cos(angle) * speed),
        )

    l4 = math.pi / 3.0
    l5 = -math.pi / 3.0
    on_circle(l4, d, test_mass)
    on_circle(l5, d, test_mass)
    on_circle(0.0, d * 0.85, test_mass)  # L1
    on_circle(0.0, d * 1.15, test_mass)  # L2
    on_circle(math.pi, d, test_mass)  # L3

    for _ in range(8):
        a_offset = (sim.rng.random() - 0.5) * 0.15
        r_offset = (sim.rng.random() - 0.5) * 4.0
        for base in (l4, l5):
            on_circle(base + a_offset, d + r_offset, test_mass * 0.5)


def random_chaos(sim, count=100):
    rng = sim.rng
    kinds = ("star", "planet", "planet", "planet", "asteroid")
    for _ in range(count):
        angle = rng.random() * 2.0 * math.pi
        r = 10.0 + rng.random() * 80.0
        pos = (math.cos(angle) * r, (rng.random() - 0.5) * 20.0, math.sin(angle) * r)
        vel = (
            (rng.random() - 0.5) * 2.0,
            (rng.random() - 0.5) * 0.5,
            (rng.random() - 0.5) * 2.0,
        )
        kind = kinds[int(rng.integers(len(kinds)))]
        mass = C.BODY_TYPES[kind]["base_mass"] * (0.3 + rng.random() * 1.5)
        sim.add_body(kind, mass, pos, vel)


PRESETS = {
    "binary": binary_stars,
    "solar": solar_system,
    "figure8": figure_eight,
    "galaxycollision": galaxy_collision,
    "lagrange": lagrange_points,
    "random": random_chaos,
}


def load_preset(sim, preset_name):
    """Clear ``sim`` and populate it with the named preset."""
    if preset_name not in PRESETS:
        raise KeyError(f"Preset '{preset_name}' not found")
    sim.clear_all()
    PRESETS[preset_name](sim)
    logger.info("loaded preset %r with %d bodies", preset_name, sim.count())
