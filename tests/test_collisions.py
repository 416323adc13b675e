import numpy as np

from gravityplay.body_store import BodyStore
from gravityplay.collisions import find_overlapping_pairs, pick_survivor, resolve_collisions
from gravityplay.config import SimulationConfig
from gravityplay.events import CollisionEvent
from gravityplay.physics import radius_for, total_momentum
from gravityplay.simulation import Simulation


def test_isolated_merge_conserves_momentum_and_mass():
    store = BodyStore()
    a = store.add("planet", 60, (0, 0, 0), (1.0, 0.5, 0.0))
    b = store.add("planet", 20, (1.0, 0, 0), (-3.0, 0.0, 2.0))
    p_before = total_momentum(store)

    events = resolve_collisions(store)

    assert len(events) == 1
    survivor = store.get(a)
    assert survivor.alive and not store.get(b).alive
    assert survivor.mass == 80
    assert np.allclose(total_momentum(store), p_before)
    assert np.allclose(survivor.pos, [0.25, 0.0, 0.0])
    assert survivor.radius == radius_for("planet", 80)


def test_heavier_body_survives_regardless_of_order():
    store = BodyStore()
    light = store.add("planet", 10, (0, 0, 0))
    heavy = store.add("planet", 90, (0.5, 0, 0))
    resolve_collisions(store)
    assert store.get(heavy).alive
    assert not store.get(light).alive


def test_equal_mass_tie_goes_to_lower_id():
    store = BodyStore()
    first = store.add("star", 800, (1, 0, 0))
    second = store.add("star", 800, (0, 0, 0))
    survivor, absorbed = pick_survivor(store.get(second), store.get(first))
    assert survivor.id == first and absorbed.id == second
    resolve_collisions(store)
    assert store.get(first).alive
    assert store.get(first).mass == 1600


def test_chain_of_overlaps_merges_once_per_body():
    store = BodyStore()
    big = store.add("planet", 100, (0, 0, 0))
    mid = store.add("planet", 50, (1, 0, 0))
    small = store.add("planet", 10, (2, 0, 0))
    assert len(find_overlapping_pairs(store)) == 3

    events = resolve_collisions(store)

    assert [e.absorbed_id for e in events] == [mid, small]
    assert store.get(big).mass == 160
    assert store.count() == 1


def test_separated_and_dead_bodies_do_not_collide():
    store = BodyStore()
    store.add("planet", 40, (0, 0, 0))
    store.add("planet", 40, (10, 0, 0))
    ghost = store.add("planet", 40, (0.1, 0, 0))
    store.remove(ghost)
    assert resolve_collisions(store) == []


def test_collision_event_payload():
    store = BodyStore()
    a = store.add("star", 800, (0, 0, 0))
    store.add("planet", 40, (2, 0, 0), color=(0.2, 0.8, 0.5))
    (event,) = resolve_collisions(store, time=4.5)
    assert isinstance(event, CollisionEvent)
    assert event.position == (1.0, 0.0, 0.0)
    assert event.combined_mass == 840
    assert event.survivor_id == a
    assert event.time == 4.5
    assert all(0.0 <= c <= 1.0 for c in event.color)


def test_overlapping_bodies_merge_within_one_tick():
    sim = Simulation(SimulationConfig(gravitational_constant=0.0))
    sim.add_body("planet", 30, (-0.5, 0, 0), (2.0, 0, 0))
    sim.add_body("planet", 10, (0.5, 0, 0), (-1.0, 0, 0))
    p_before = sim.momentum()
    events = sim.step()
    assert len(events) == 1
    assert sim.count() == 1
    (survivor,) = sim.alive_bodies()
    assert survivor.mass == 40
    assert np.allclose(sim.momentum(), p_before)
