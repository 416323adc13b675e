import numpy as np
import pytest

from gravityplay import constants as C
from gravityplay.forces import direct_accelerations
from gravityplay.octree import Octree


def _random_system(n, seed=0, extent=50.0):
    rng = np.random.default_rng(seed)
    positions = rng.uniform(-extent, extent, size=(n, 3))
    masses = rng.uniform(1.0, 10.0, size=n)
    return positions, masses


def test_bounding_half_size_has_floor():
    assert Octree.bounding_half_size(np.zeros((3, 3))) == C.TREE_MIN_HALF_SIZE * C.TREE_PADDING
    pos = np.array([[0.0, -400.0, 0.0]])
    assert Octree.bounding_half_size(pos) == pytest.approx(600.0)


def test_node_mass_and_center_of_mass_invariants():
    positions, masses = _random_system(60)
    tree = Octree.build(positions, masses)

    assert tree.node_mass[0] == pytest.approx(masses.sum())
    expected_com = (positions * masses[:, None]).sum(axis=0) / masses.sum()
    assert np.allclose(tree.node_com[0], expected_com)

    for node in range(tree.node_count):
        children = tree.children(node)
        if children:
            # internal nodes hold no body and have exactly eight children
            assert len(children) == 8
            assert tree.leaf_bodies(node) == []
            assert tree.node_mass[node] == pytest.approx(tree.node_mass[children].sum())
        else:
            assert len(tree.leaf_bodies(node)) <= 1


def test_every_body_lands_in_a_leaf_that_contains_it():
    positions, masses = _random_system(40, seed=3)
    tree = Octree.build(positions, masses)
    seen = []
    for node in range(tree.node_count):
        if not tree.is_leaf(node):
            continue
        for idx in tree.leaf_bodies(node):
            offset = np.abs(positions[idx] - tree.node_center[node])
            assert np.all(offset <= tree.node_half[node] + 1e-9)
            seen.append(idx)
    assert sorted(seen) == list(range(40))


def test_coincident_bodies_share_a_leaf():
    positions = np.array([[1.0, 1.0, 1.0]] * 3 + [[-20.0, 5.0, 0.0]])
    masses = np.array([1.0, 2.0, 3.0, 4.0])
    tree = Octree.build(positions, masses, max_depth=6)
    buckets = [tree.leaf_bodies(n) for n in range(tree.node_count) if tree.is_leaf(n)]
    assert sorted(max(buckets, key=len)) == [0, 1, 2]
    assert tree.node_mass[0] == pytest.approx(10.0)
    acc = tree.accelerations(1.0, 0.5, C.SOFTENING_LENGTH)
    assert np.all(np.isfinite(acc))


def test_zero_theta_matches_direct_sum():
    positions, masses = _random_system(120, seed=5)
    tree = Octree.build(positions, masses)
    exact = direct_accelerations(positions, masses, 1.0, 2.0)
    approx = tree.accelerations(1.0, 0.0, 2.0)
    assert np.allclose(approx, exact, rtol=1e-9, atol=1e-12)


def test_compute_force_single_body_matches_batch():
    positions, masses = _random_system(30, seed=9)
    tree = Octree.build(positions, masses)
    batch = tree.accelerations(1.0, 0.7, 2.0)
    assert np.allclose(tree.compute_force(7, 1.0, 0.7, 2.0), batch[7])


def test_error_decreases_as_theta_shrinks():
    positions, masses = _random_system(400, seed=11)
    exact = direct_accelerations(positions, masses, 1.0, 2.0)
    tree = Octree.build(positions, masses)
    errors = []
    for theta in (1.0, 0.6, 0.3, 0.1):
        approx = tree.accelerations(1.0, theta, 2.0)
        rel = np.linalg.norm(approx - exact, axis=1) / np.linalg.norm(exact, axis=1)
        errors.append(rel.mean())
    assert all(a > b for a, b in zip(errors, errors[1:]))
    assert errors[-1] < 1e-3


def test_insert_after_finalize_is_rejected():
    positions, masses = _random_system(3)
    tree = Octree.build(positions, masses)
    with pytest.raises(RuntimeError):
        tree.insert(0)
