"""Barnes-Hut octree stored in a flat, per-build arena.

Nodes are integer indices into parallel arrays; the eight children of an
internal node are contiguous, so a node only records the index of its first
child.  A tree is built from scratch for one force pass and then discarded.
"""
import numpy as np

from . import constants as C
from .jit import tree_accelerations_jit


class Octree:
    """Barnes-Hut octree over a set of point masses."""

    __slots__ = (
        "positions",
        "masses",
        "max_depth",
        "_center",
        "_half",
        "_mass",
        "_msum",
        "_count",
        "_child",
        "_body",
        "next_body",
        "node_com",
        "node_mass",
        "node_half",
        "node_child",
        "node_body",
        "node_center",
        "finalized",
    )

    def __init__(self, positions, masses, half_size=None, max_depth=C.TREE_MAX_DEPTH):
        self.positions = np.ascontiguousarray(positions, dtype=np.float64).reshape(-1, 3)
        self.masses = np.ascontiguousarray(masses, dtype=np.float64).reshape(-1)
        self.max_depth = int(max_depth)
        if half_size is None:
            half_size = self.bounding_half_size(self.positions)
        self._center = []
        self._half = []
        self._mass = []
        self._msum = []
        self._count = []
        self._child = []
        self._body = []
        self.next_body = np.full(len(self.masses), -1, dtype=np.int64)
        self.finalized = False
        self._new_node((0.0, 0.0, 0.0), float(half_size))

    @staticmethod
    def bounding_half_size(positions):
        """``1.5 * max|coordinate|`` over all bodies, with a floor of 100."""
        max_coord = C.TREE_MIN_HALF_SIZE
        if len(positions):
            max_coord = max(max_coord, float(np.max(np.abs(positions))))
        return max_coord * C.TREE_PADDING

    @classmethod
    def build(cls, positions, masses, **kwargs):
        """Insert every body and finalize; the usual way to get a tree."""
        tree = cls(positions, masses, **kwargs)
        for idx in range(len(tree.masses)):
            tree.insert(idx)
        tree.finalize()
        return tree

    # ------------------------------------------------------------------
    def _new_node(self, center, half):
        self._center.append(center)
        self._half.append(half)
        self._mass.append(0.0)
        self._msum.append([0.0, 0.0, 0.0])
        self._count.append(0)
        self._child.append(-1)
        self._body.append(-1)
        return len(self._half) - 1

    def _subdivide(self, node):
        cx, cy, cz = self._center[node]
        hs = self._half[node] * 0.5
        first = len(self._half)
        for i in range(8):
            self._new_node(
                (
                    cx + (hs if i & 1 else -hs),
                    cy + (hs if i & 2 else -hs),
                    cz + (hs if i & 4 else -hs),
                ),
                hs,
            )
        self._child[node] = first

    def _octant(self, node, x, y, z):
        cx, cy, cz = self._center[node]
        idx = 0
        if x > cx:
            idx |= 1
        if y > cy:
            idx |= 2
        if z > cz:
            idx |= 4
        return idx

    def _accumulate(self, node, idx):
        m = self.masses[idx]
        x, y, z = self.positions[idx]
        self._mass[node] += m
        s = self._msum[node]
        s[0] += m * x
        s[1] += m * y
        s[2] += m * z
        self._count[node] += 1

    def insert(self, idx):
        """Insert body ``idx``, subdividing occupied leaves on the way down."""
        if self.finalized:
            raise RuntimeError("cannot insert into a finalized octree")
        x, y, z = self.positions[idx]
        node = 0
        depth = 0
        while True:
            self._accumulate(node, idx)
            if self._count[node] == 1:
                self._body[node] = idx
                return
            if self._child[node] < 0:
                if depth >= self.max_depth:
                    # coincident bodies: chain them in this leaf
                    self.next_body[idx] = self._body[node]
                    self._body[node] = idx
                    return
                self._subdivide(node)
                existing = self._body[node]
                self._body[node] = -1
                ex, ey, ez = self.positions[existing]
                child = self._child[node] + self._octant(node, ex, ey, ez)
                self._accumulate(child, existing)
                self._body[child] = existing
            node = self._child[node] + self._octant(node, x, y, z)
            depth += 1

    def finalize(self):
        """Turn accumulated position sums into centres of mass."""
        self.node_mass = np.asarray(self._mass, dtype=np.float64)
        msum = np.asarray(self._msum, dtype=np.float64).reshape(-1, 3)
        self.node_com = np.zeros_like(msum)
        filled = self.node_mass > 0
        self.node_com[filled] = msum[filled] / self.node_mass[filled, None]
        self.node_half = np.asarray(self._half, dtype=np.float64)
        self.node_child = np.asarray(self._child, dtype=np.int64)
        self.node_body = np.asarray(self._body, dtype=np.int64)
        self.node_center = np.asarray(self._center, dtype=np.float64).reshape(-1, 3)
        self.finalized = True
        return self

    # ------------------------------------------------------------------
    @property
    def node_count(self):
        return len(self._half)

    def is_leaf(self, node):
        return self._child[node] < 0

    def children(self, node):
        first = self._child[node]
        if first < 0:
            return []
        return list(range(first, first + 8))

    def leaf_bodies(self, node):
        """Indices of the bodies stored directly in leaf ``node``."""
        out = []
        b = self._body[node]
        while b >= 0:
            out.append(int(b))
            b = self.next_body[b]
        return out

    def _query(self, targets, g_constant, theta, softening):
        if not self.finalized:
            raise RuntimeError("octree must be finalized before querying")
        return tree_accelerations_jit(
            np.ascontiguousarray(targets, dtype=np.int64),
            self.positions,
            self.masses,
            self.node_com,
            self.node_mass,
            self.node_half,
            self.node_child,
            self.node_body,
            self.next_body,
            float(g_constant),
            float(theta),
            float(softening) ** 2,
            8 * (self.max_depth + 2),
        )

    def compute_force(self, idx, g_constant, theta, softening):
        """Approximate acceleration on body ``idx`` (per unit mass)."""
        return self._query(np.array([idx]), g_constant, theta, softening)[0]

    def accelerations(self, g_constant, theta, softening):
        """Approximate acceleration on every body in the tree."""
        return self._query(np.arange(len(self.masses)), g_constant, theta, softening)
