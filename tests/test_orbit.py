import math

import numpy as np
import pytest

from gravityplay.orbit import predict_orbit
from gravityplay.simulation import Simulation


def test_polyline_starts_at_current_position():
    path = predict_orbit((1, 2, 3), (0, 0, 0), [], [], steps=10)
    assert path.shape == (10, 3)
    assert np.allclose(path, [1, 2, 3])


def test_circular_orbit_around_frozen_star_stays_near_radius():
    v = math.sqrt(800 / 30)
    path = predict_orbit((30, 0, 0), (0, 0, v), [(0, 0, 0)], [800], softening=0.0, dt=0.075, steps=300)
    radii = np.linalg.norm(path, axis=1)
    assert radii.min() > 28.0
    assert radii.max() < 32.0


def test_prediction_does_not_mutate_simulation():
    sim = Simulation()
    sim.load_preset("binary")
    star = sim.alive_bodies()[0].id
    before = sim.alive_bodies()
    path = sim.predict_orbit(star, horizon_steps=300)
    assert path.shape == (300, 3)
    assert np.allclose(path[0], sim.get(star).position)
    assert sim.alive_bodies() == before
    assert sim.tick_count == 0


def test_prediction_for_dead_and_unknown_bodies():
    sim = Simulation()
    body = sim.add_body("planet", 40, (0, 0, 0))
    sim.remove_body(body)
    assert sim.predict_orbit(body).shape == (0, 3)
    with pytest.raises(KeyError):
        sim.predict_orbit(999)
