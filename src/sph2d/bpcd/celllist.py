"""
Cell linked list for 2D neighbor search.

The domain is covered by square cells whose edge equals the kernel cutoff, so
that every neighbor of a particle lies in the 3 x 3 block of cells around it.
Positions outside the domain are clamped into the border cells, which keeps
that property.

The pipeline consists of three stages:
1. Count particles per cell.
2. Compute cell offsets with an exclusive prefix sum.
3. Emit particle indices into a compact list ordered by particle index.
"""

import taichi as ti
from .utils import *

#=====================================
# Type Definitions
#=====================================

Vector2 = ti.types.vector(2, float)
Vector2i = ti.types.vector(2, int)


@ti.data_oriented
class CellLinkedList:
    """
    Particle indices sorted by cell for one body.
    """

    @ti.dataclass
    class Cell:
        offset: int    # Start index in the compact particle_id list
        count: int     # Number of particles in this cell
        current: int   # Insertion counter

    def __init__(self, particle_count: int, cell_size: float, domain_min, domain_max):
        self.cell_size = cell_size
        self.domain_min = Vector2(domain_min[0], domain_min[1])
        self.nx, self.ny = cell_grid_size(domain_min, domain_max, cell_size)
        self.cells = CellLinkedList.Cell.field(shape=self.nx * self.ny)
        self.particle_id = ti.field(dtype=int, shape=particle_count)

    def update(self, positions):
        """Rebuild the cell lists from the current positions."""
        self._count_particles(positions)
        self._prefix_sum()
        self._put_particles(positions)

    @ti.kernel
    def _count_particles(self, positions: ti.template()):
        cells = ti.static(self.cells)
        for c in cells:
            cells[c].offset = 0
            cells[c].count = 0
            cells[c].current = 0
        for i in positions:
            ti.atomic_add(cells[self.cell_index(positions[i])].count, 1)

    @ti.kernel
    def _prefix_sum(self):
        """Serial exclusive prefix sum over the cell counts."""
        cells = ti.static(self.cells)
        ti.loop_config(serialize=True)
        for c in range(1, cells.shape[0]):
            cells[c].offset = cells[c - 1].offset + cells[c - 1].count

    @ti.kernel
    def _put_particles(self, positions: ti.template()):
        """Serial insertion keeps every cell ordered by particle index."""
        cells = ti.static(self.cells)
        ti.loop_config(serialize=True)
        for i in range(positions.shape[0]):
            c = self.cell_index(positions[i])
            self.particle_id[cells[c].offset + cells[c].current] = i
            cells[c].current += 1

    @ti.func
    def cell(self, xy: Vector2) -> Vector2i:
        """Map a world-space position to clamped integer cell coordinates."""
        ij = ti.floor((xy - self.domain_min) / self.cell_size, dtype=int)
        ij[0] = ti.min(ti.max(ij[0], 0), self.nx - 1)
        ij[1] = ti.min(ti.max(ij[1], 0), self.ny - 1)
        return ij

    @ti.func
    def linear_index(self, ij: Vector2i) -> int:
        return ij[0] * self.ny + ij[1]

    @ti.func
    def cell_index(self, xy: Vector2) -> int:
        return self.linear_index(self.cell(xy))

    @ti.func
    def in_grid(self, ij: Vector2i):
        return ij[0] >= 0 and ij[0] < self.nx and ij[1] >= 0 and ij[1] < self.ny
