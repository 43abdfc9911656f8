"""
Inner relation of an elastic body in the reference configuration.

The total Lagrangian formulation evaluates all inner kernel quantities once,
at the reference positions, so the list is built a single time per run.
"""

import numpy as np
import taichi as ti

from ..body import SolidBody
from ..dateclass import Neighbor
from ..errors import NeighborOverflowError
from ..kernel import WendlandC2Kernel
from .utils import *


@ti.data_oriented
class InnerRelation:

    def __init__(self, body: SolidBody, kernel: WendlandC2Kernel, max_neighbors: int = 0):
        self.body = body
        self.kernel = kernel
        self.cutoff = kernel.cutoff
        self.max_neighbors = max_neighbors if max_neighbors > 0 else body.config.max_neighbors

        n = body.particle_count
        self.neighbors = Neighbor.field(shape=(n, self.max_neighbors))
        self.nbr_count = ti.field(dtype=int, shape=n)
        self.overflow = ti.field(dtype=int, shape=())

    def initialize_configuration(self):
        """Build the neighbor lists from the reference positions."""
        self.body.cell_linked_list.update(self.body.pf.pos0)
        self._build()
        if self.overflow[None] > 0:
            raise NeighborOverflowError(
                f"Inner relation of {self.body.name}: {self.overflow[None]} neighbors exceed "
                f"max_neighbors={self.max_neighbors}")

    @ti.kernel
    def _build(self):
        pf = ti.static(self.body.pf)
        cells = ti.static(self.body.cell_linked_list.cells)
        particle_id = ti.static(self.body.cell_linked_list.particle_id)
        self.overflow[None] = 0
        for i in pf:
            count = 0
            xi = pf[i].pos0
            ij = self.body.cell_linked_list.cell(xi)
            for di in ti.static(range(-1, 2)):
                for dj in ti.static(range(-1, 2)):
                    c = ij + Vector2i(di, dj)
                    if self.body.cell_linked_list.in_grid(c):
                        cid = self.body.cell_linked_list.linear_index(c)
                        start = cells[cid].offset
                        for k in range(start, start + cells[cid].count):
                            j = particle_id[k]
                            r_ij = xi - pf[j].pos0
                            r = r_ij.norm()
                            if j != i and r < self.cutoff:
                                if count < self.max_neighbors:
                                    self.neighbors[i, count].j = j
                                    self.neighbors[i, count].r0 = r
                                    self.neighbors[i, count].dW0 = self.kernel.dW(r)
                                    self.neighbors[i, count].e0 = r_ij / ti.max(r, TinyReal)
                                    count += 1
                                else:
                                    ti.atomic_add(self.overflow[None], 1)
            self.nbr_count[i] = count

    def unique_pairs(self) -> np.ndarray:
        """Undirected pairs (i < j) of the relation, sorted, shape (n_pairs, 2)."""
        counts = self.nbr_count.to_numpy()
        table = self.neighbors.j.to_numpy()
        rows = np.repeat(np.arange(counts.shape[0]), counts)
        cols = np.concatenate([table[i, :counts[i]] for i in range(counts.shape[0])]) \
            if counts.sum() > 0 else np.empty(0, dtype=np.int32)
        pairs = np.column_stack([rows, cols]).astype(np.int32)
        pairs = pairs[pairs[:, 0] < pairs[:, 1]]
        if pairs.size == 0:
            return np.empty((0, 2), dtype=np.int32)
        return np.unique(pairs, axis=0)
