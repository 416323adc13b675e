import numpy as np
import pytest

from gravityplay import CapacityError, ValidationError
from gravityplay.config import SimulationConfig
from gravityplay.events import CollisionEvent
from gravityplay.simulation import Simulation


def _positions(sim):
    return np.array([b.position for b in sim.alive_bodies()])


def test_clear_all_then_count_is_zero():
    sim = Simulation()
    sim.load_preset("solar")
    sim.run(3)
    sim.clear_all()
    assert sim.count() == 0
    assert sim.alive_bodies() == []


def test_add_body_errors_surface():
    sim = Simulation(SimulationConfig(max_bodies=1))
    sim.add_body("star", 800, (0, 0, 0))
    with pytest.raises(CapacityError):
        sim.add_body("star", 800, (100, 0, 0))
    with pytest.raises(ValidationError):
        sim.add_body("star", -1, (100, 0, 0))
    assert sim.count() == 1


def test_snapshots_are_read_only_copies():
    sim = Simulation()
    body_id = sim.add_body("planet", 40, (1, 2, 3), (0, 1, 0))
    snap = sim.get(body_id)
    with pytest.raises(AttributeError):
        snap.mass = 5
    sim.step()
    assert snap.position == (1.0, 2.0, 3.0)
    assert sim.get(body_id).age == pytest.approx(sim.config.timestep)


def test_default_dt_is_base_timestep_times_time_scale():
    sim = Simulation(SimulationConfig(base_timestep=0.1, time_scale=2.0))
    sim.add_body("asteroid", 1, (0, 0, 0), (1, 0, 0))
    sim.step()
    assert sim.time == pytest.approx(0.2)
    assert sim.get(0).position[0] == pytest.approx(0.2)


def test_removed_body_exerts_no_force():
    sim = Simulation()
    probe = sim.add_body("asteroid", 1, (0, 0, 0))
    heavy = sim.add_body("star", 800, (40, 0, 0))
    sim.remove_body(heavy)
    sim.step()
    assert sim.get(probe).position == (0.0, 0.0, 0.0)
    assert heavy not in sim.store


def test_same_seed_gives_identical_runs():
    runs = []
    for _ in range(2):
        sim = Simulation(SimulationConfig(seed=7))
        sim.load_preset("random")
        sim.run(30)
        runs.append((sim.count(), _positions(sim)))
    assert runs[0][0] == runs[1][0]
    assert np.array_equal(runs[0][1], runs[1][1])


def test_tree_path_matches_direct_path_at_zero_theta():
    results = []
    for threshold in (1000, 1):
        sim = Simulation(SimulationConfig(seed=3, opening_angle=0.0, direct_sum_threshold=threshold))
        sim.load_preset("lagrange")
        sim.run(20)
        results.append(_positions(sim))
    assert results[0].shape == results[1].shape
    assert np.allclose(results[0], results[1], rtol=1e-9, atol=1e-7)


def test_events_reach_subscribers_and_poll_queue():
    sim = Simulation(SimulationConfig(gravitational_constant=0.0))
    received = []
    sim.subscribe(received.append)
    sim.add_body("planet", 40, (0, 0, 0))
    sim.add_body("planet", 20, (1, 0, 0))
    events = sim.step()
    assert received == events
    assert isinstance(events[0], CollisionEvent)
    assert sim.drain_events() == events
    assert sim.drain_events() == []


def test_configure_updates_runtime_options():
    sim = Simulation()
    sim.configure(max_bodies=1, trail_length=10)
    sim.add_body("star", 800, (0, 0, 0))
    with pytest.raises(CapacityError):
        sim.add_body("star", 800, (50, 0, 0))
    assert sim.trails.max_trail_length == 10


def test_center_of_mass_and_energy_of_empty_sim():
    sim = Simulation()
    assert sim.center_of_mass() == (None, None)
    assert sim.energy() == (0.0, 0.0, 0.0)
    sim.step()
    assert sim.tick_count == 1


def test_configure_refuses_cap_below_population():
    sim = Simulation()
    for i in range(4):
        sim.add_body("asteroid", 1.0, (i * 20.0, 0.0, 0.0))
    with pytest.raises(CapacityError):
        sim.configure(max_bodies=3)
    assert sim.config.max_bodies == SimulationConfig().max_bodies
    assert sim.store.max_bodies == SimulationConfig().max_bodies
    sim.configure(max_bodies=4)
    assert sim.config.max_bodies == 4
