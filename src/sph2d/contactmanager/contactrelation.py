"""
Contact topology between a receiving body and a contact body.

For every particle of the receiving body the relation lists the particles of
the contact body within the kernel support. The lists are rebuilt from
scratch by update_configuration(); they are never patched incrementally.
"""

import taichi as ti

from ..body import SolidBody
from ..errors import NeighborOverflowError

#=====================================
# Type Definitions
#=====================================

Vector2i = ti.types.vector(2, int)


@ti.data_oriented
class ContactRelation:

    def __init__(self, body: SolidBody, contact_body: SolidBody, max_neighbors: int = 0):
        if body is contact_body:
            raise ValueError("A contact relation needs two different bodies")
        self.body = body
        self.contact_body = contact_body
        self.cutoff = body.config.cutoff_radius
        self.max_neighbors = max_neighbors if max_neighbors > 0 else body.config.max_neighbors

        n = body.particle_count
        self.nbr_j = ti.field(dtype=int, shape=(n, self.max_neighbors))
        self.nbr_count = ti.field(dtype=int, shape=n)
        self.overflow = ti.field(dtype=int, shape=())

    @property
    def name(self) -> str:
        return f"{self.body.name}-{self.contact_body.name}"

    def update_configuration(self):
        """
        Rebuild the neighbor lists. The contact body's cell linked list must be
        up to date with its current positions.
        """
        self._update_configuration()
        if self.overflow[None] > 0:
            raise NeighborOverflowError(
                f"Contact relation {self.name}: {self.overflow[None]} neighbors exceed "
                f"max_neighbors={self.max_neighbors}")

    @ti.kernel
    def _update_configuration(self):
        pf = ti.static(self.body.pf)
        cpf = ti.static(self.contact_body.pf)
        cells = ti.static(self.contact_body.cell_linked_list.cells)
        particle_id = ti.static(self.contact_body.cell_linked_list.particle_id)
        self.overflow[None] = 0
        for i in pf:
            count = 0
            xi = pf[i].pos
            ij = self.contact_body.cell_linked_list.cell(xi)
            for di in ti.static(range(-1, 2)):
                for dj in ti.static(range(-1, 2)):
                    c = ij + Vector2i(di, dj)
                    if self.contact_body.cell_linked_list.in_grid(c):
                        cid = self.contact_body.cell_linked_list.linear_index(c)
                        start = cells[cid].offset
                        for k in range(start, start + cells[cid].count):
                            j = particle_id[k]
                            if (xi - cpf[j].pos).norm() < self.cutoff:
                                if count < self.max_neighbors:
                                    self.nbr_j[i, count] = j
                                    count += 1
                                else:
                                    ti.atomic_add(self.overflow[None], 1)
            self.nbr_count[i] = count

    def neighbor_counts(self):
        return self.nbr_count.to_numpy()

    def neighbor_lists(self):
        """Neighbor indices per receiving particle, as a list of numpy arrays."""
        counts = self.nbr_count.to_numpy()
        table = self.nbr_j.to_numpy()
        return [table[i, :counts[i]] for i in range(counts.shape[0])]
