"""
Particle body of a deformable or rigid-coupled solid.

The particle population is created once from a generator and kept for the
whole run; particles are never added, removed or reordered.
"""

from enum import IntEnum

import numpy as np
import taichi as ti

from ..bpcd import CellLinkedList
from ..dateclass import Particle
from ..geometry import MultiPolygonShape
from ..sphconfig import ElasticSolidConfig, SPHSolverConfig

#=====================================
# Type Definitions
#=====================================

Vector2 = ti.types.vector(2, float)


class BodyRole(IntEnum):
    """How other bodies see this body when computing contact density."""
    VOLUMETRIC = 0  # filled solid
    SHELL = 1       # thin surface, thickened along the contacting particle's normal


@ti.data_oriented
class SolidBody:

    def __init__(self, name: str, shape: MultiPolygonShape, material: ElasticSolidConfig,
                 generator, config: SPHSolverConfig, role: BodyRole = BodyRole.VOLUMETRIC):
        material.validate()
        self.name = name
        self.shape = shape
        self.material = material
        self.role = role
        self.config = config
        self.reference_spacing = config.resolution

        positions, volumes = generator.generate(shape, config.resolution)
        positions = np.asarray(positions, dtype=float)
        volumes = np.asarray(volumes, dtype=float)
        n = positions.shape[0]
        if n == 0:
            raise ValueError(f"Body {name} has no particles")
        self.particle_count = n

        self.pf = Particle.field(shape=n)
        self.pf.ID.from_numpy(np.arange(n, dtype=np.int32))
        self.pf.vol0.from_numpy(volumes)
        self.pf.mass.from_numpy(volumes * material.rho0)
        self.pf.rho0.fill(material.rho0)
        self.pf.rho.fill(material.rho0)
        self.pf.pos.from_numpy(positions)
        self.pf.pos0.from_numpy(positions)
        self.pf.vel.fill(0.0)
        self.pf.acc.fill(0.0)
        self.pf.acc_prior.fill(0.0)
        identity = np.tile(np.eye(2), (n, 1, 1))
        self.pf.F.from_numpy(identity)
        self.pf.B.from_numpy(identity)
        self.pf.dF_dt.fill(0.0)
        self.pf.stress_PK1_B.fill(0.0)
        self.pf.n.fill(0.0)
        self.pf.n0.fill(0.0)
        self.pf.contact_density.fill(0.0)
        self.pf.contact_force.fill(0.0)

        self.cell_linked_list = CellLinkedList(n, config.cutoff_radius,
                                               config.domain_min, config.domain_max)

        print(f"Initialized body {name} with {n} particles ({role.name.lower()})")

    def initialize_normal_direction_from_body_shape(self):
        normals = self.shape.find_normal_direction(self.pf.pos0.to_numpy())
        self.pf.n0.from_numpy(normals)
        self.pf.n.from_numpy(normals)

    def update_cell_linked_list(self):
        self.cell_linked_list.update(self.pf.pos)

    def set_initial_velocity(self, velocity):
        self._set_velocity(float(velocity[0]), float(velocity[1]))

    @ti.kernel
    def _set_velocity(self, vx: float, vy: float):
        for i in self.pf:
            self.pf[i].vel = Vector2(vx, vy)

    @ti.kernel
    def initialize_time_step(self, gx: float, gy: float):
        """Reset the prior acceleration to the body force at the start of a sub-step."""
        for i in self.pf:
            self.pf[i].acc_prior = Vector2(gx, gy)

    def positions(self) -> np.ndarray:
        return self.pf.pos.to_numpy()

    def velocities(self) -> np.ndarray:
        return self.pf.vel.to_numpy()
