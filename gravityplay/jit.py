"""numba kernels for the force inner loops.

Both kernels take plain contiguous ``float64``/``int64`` arrays so that the
Python side (body store, octree builder) stays free of numba types.
"""
import math

import numba as nb
import numpy as np


@nb.njit
def direct_accelerations_jit(positions, masses, g_const, softening_sq):
    """Pairwise softened accelerations, applying Newton's third law per pair."""
    n = positions.shape[0]
    acc = np.zeros((n, 3), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            dz = positions[j, 2] - positions[i, 2]
            dist_sq = dx * dx + dy * dy + dz * dz + softening_sq
            if dist_sq == 0.0:
                continue
            inv_dist3 = g_const / (dist_sq * math.sqrt(dist_sq))
            acc[i, 0] += dx * inv_dist3 * masses[j]
            acc[i, 1] += dy * inv_dist3 * masses[j]
            acc[i, 2] += dz * inv_dist3 * masses[j]
            acc[j, 0] -= dx * inv_dist3 * masses[i]
            acc[j, 1] -= dy * inv_dist3 * masses[i]
            acc[j, 2] -= dz * inv_dist3 * masses[i]
    return acc


@nb.njit
def tree_accelerations_jit(
    targets,
    positions,
    masses,
    node_com,
    node_mass,
    node_half,
    node_child,
    node_body,
    next_body,
    g_const,
    theta,
    softening_sq,
    stack_size,
):
    """Barnes-Hut acceleration for each body index in ``targets``.

    Walks the flat node arena with an explicit stack.  ``node_child[k]`` is
    the index of the first of eight contiguous children, or ``-1`` for a leaf;
    a leaf's bodies form a chain ``node_body[k] -> next_body[...] -> -1``.
    Each target accumulates into its own output row.
    """
    out = np.zeros((targets.shape[0], 3), dtype=np.float64)
    stack = np.empty(stack_size, dtype=np.int64)
    for t in range(targets.shape[0]):
        i = targets[t]
        px = positions[i, 0]
        py = positions[i, 1]
        pz = positions[i, 2]
        ax = 0.0
        ay = 0.0
        az = 0.0
        stack[0] = 0
        top = 1
        while top > 0:
            top -= 1
            node = stack[top]
            if node_mass[node] <= 0.0:
                continue
            if node_child[node] < 0:
                b = node_body[node]
                while b >= 0:
                    if b != i:
                        dx = positions[b, 0] - px
                        dy = positions[b, 1] - py
                        dz = positions[b, 2] - pz
                        dist_sq = dx * dx + dy * dy + dz * dz + softening_sq
                        if dist_sq > 0.0:
                            f = g_const * masses[b] / (dist_sq * math.sqrt(dist_sq))
                            ax += f * dx
                            ay += f * dy
                            az += f * dz
                    b = next_body[b]
                continue
            dx = node_com[node, 0] - px
            dy = node_com[node, 1] - py
            dz = node_com[node, 2] - pz
            dist_sq = dx * dx + dy * dy + dz * dz + softening_sq
            dist = math.sqrt(dist_sq)
            if dist > 0.0 and 2.0 * node_half[node] / dist < theta:
                f = g_const * node_mass[node] / (dist_sq * dist)
                ax += f * dx
                ay += f * dy
                az += f * dz
                continue
            first = node_child[node]
            for k in range(8):
                stack[top] = first + k
                top += 1
        out[t, 0] = ax
        out[t, 1] = ay
        out[t, 2] = az
    return out
