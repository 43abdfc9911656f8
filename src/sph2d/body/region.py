"""
Fixed particle regions of a body.

Membership is decided once from the reference positions and never changes.
"""

import numpy as np
import taichi as ti

from ..geometry import MultiPolygonShape
from .solidbody import SolidBody

#=====================================
# Type Definitions
#=====================================

Vector2 = ti.types.vector(2, float)


@ti.data_oriented
class BodyRegionByParticle:
    """Particles of a body whose reference position lies inside a shape."""

    def __init__(self, body: SolidBody, name: str, shape: MultiPolygonShape):
        self.body = body
        self.name = name
        self.shape = shape

        positions0 = body.pf.pos0.to_numpy()
        index_list = np.nonzero(shape.contains(positions0))[0].astype(np.int32)
        if index_list.size == 0:
            raise ValueError(f"Region {name} of body {body.name} contains no particle")
        self.index_list = index_list
        self.particle_count = index_list.size
        self.indices = ti.field(dtype=int, shape=self.particle_count)
        self.indices.from_numpy(index_list)


@ti.data_oriented
class SolidBodyPartForRigid(BodyRegionByParticle):
    """
    Region represented by a rigid body.

    Mass, mass centre and polar moment of inertia are summed from the region's
    particles; the initial offsets from the mass centre define the rigid shape.
    """

    def __init__(self, body: SolidBody, name: str, shape: MultiPolygonShape):
        super().__init__(body, name, shape)

        masses = body.pf.mass.to_numpy()[self.index_list]
        positions0 = body.pf.pos0.to_numpy()[self.index_list]

        self.mass = float(np.sum(masses))
        self.mass_center = np.sum(masses[:, None] * positions0, axis=0) / self.mass
        offsets = positions0 - self.mass_center
        self.inertia = float(np.sum(masses * np.einsum("ij,ij->i", offsets, offsets)))

        self.offset0 = ti.Vector.field(2, dtype=float, shape=self.particle_count)
        self.offset0.from_numpy(offsets)

    def initial_offsets(self) -> np.ndarray:
        return self.offset0.to_numpy()
