import time
import numpy as np

from gravityplay.constants import G_DEFAULT, SOFTENING_LENGTH, THETA
from gravityplay.forces import direct_accelerations, tree_accelerations


def compute_accelerations_python(positions, masses, g_constant=G_DEFAULT, softening=SOFTENING_LENGTH):
    n = len(masses)
    if n == 0:
        return np.zeros((0, 3), dtype=np.float64)
    acc = np.zeros((n, 3), dtype=np.float64)
    eps_sq = softening * softening
    for i in range(n):
        r_vec = positions - positions[i]
        dist_sq = np.einsum("ij,ij->i", r_vec, r_vec)
        mask = dist_sq > 0.0
        soft_sq = dist_sq[mask] + eps_sq
        factors = g_constant * masses[mask] / (soft_sq * np.sqrt(soft_sq))
        acc[i] = np.sum(r_vec[mask] * factors[:, None], axis=0)
    return acc


if __name__ == "__main__":
    rng = np.random.default_rng(0)
    N = 1500  # >1k bodies
    positions = (rng.random((N, 3)) - 0.5) * 300.0
    masses = rng.random(N) * 10.0 + 1.0

    # warm up JIT
    direct_accelerations(positions[:10], masses[:10], G_DEFAULT, SOFTENING_LENGTH)
    tree_accelerations(positions[:10], masses[:10], G_DEFAULT, SOFTENING_LENGTH, THETA)

    t0 = time.time()
    baseline = compute_accelerations_python(positions, masses)
    t1 = time.time()
    direct = direct_accelerations(positions, masses, G_DEFAULT, SOFTENING_LENGTH)
    t2 = time.time()
    tree = tree_accelerations(positions, masses, G_DEFAULT, SOFTENING_LENGTH, THETA)
    t3 = time.time()

    assert np.allclose(baseline, direct)
    err = np.linalg.norm(tree - direct, axis=1) / np.linalg.norm(direct, axis=1)
    print(f"Python loop : {t1 - t0:.3f}s")
    print(f"Direct (jit): {t2 - t1:.3f}s")
    print(f"Barnes-Hut  : {t3 - t2:.3f}s  (theta={THETA}, median rel. error {np.median(err):.2e})")
