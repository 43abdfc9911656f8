"""
Coupling between a rigid body and the particle region it represents.

- TotalForceOnBodyPartForRigid: contact force resultant and torque of the
  region, handed to the rigid body engine as its discrete load.
- ConstrainBodyPartByRigid: the region follows the rigid transform exactly.
"""

import math

import numpy as np
import taichi as ti

from ..body import SolidBodyPartForRigid
from .engine import RigidBodyEngine

#=====================================
# Type Definitions
#=====================================

Vector2 = ti.types.vector(2, float)
Matrix2x2 = ti.types.matrix(2, 2, float)


@ti.data_oriented
class TotalForceOnBodyPartForRigid:

    def __init__(self, part: SolidBodyPartForRigid, engine: RigidBodyEngine, body: int = 0):
        self.part = part
        self.engine = engine
        self.body_index = body
        self.force = ti.Vector.field(2, dtype=float, shape=())
        self.torque = ti.field(dtype=float, shape=())

    def exec(self):
        """Sum the region's contact forces and apply them to the rigid body."""
        center, _ = self.engine.current_transform(self.body_index)
        self._sum(float(center[0]), float(center[1]))
        force = self.force.to_numpy()
        torque = float(self.torque[None])
        self.engine.apply_force(force, torque, self.body_index)
        return force, torque

    @ti.kernel
    def _sum(self, cx: float, cy: float):
        pf = ti.static(self.part.body.pf)
        center = Vector2(cx, cy)
        force = Vector2(0.0, 0.0)
        torque = 0.0
        # Fixed summation order
        ti.loop_config(serialize=True)
        for k in range(self.part.particle_count):
            i = self.part.indices[k]
            f = pf[i].contact_force
            arm = pf[i].pos - center
            force += f
            torque += arm[0] * f[1] - arm[1] * f[0]
        self.force[None] = force
        self.torque[None] = torque


@ti.data_oriented
class ConstrainBodyPartByRigid:

    def __init__(self, part: SolidBodyPartForRigid, engine: RigidBodyEngine, body: int = 0):
        self.part = part
        self.engine = engine
        self.body_index = body

    def exec(self):
        center, angle = self.engine.current_transform(self.body_index)
        velocity, omega = self.engine.current_velocity(self.body_index)
        self._constrain(float(center[0]), float(center[1]), math.cos(angle), math.sin(angle),
                        float(velocity[0]), float(velocity[1]), float(omega))

    @ti.kernel
    def _constrain(self, cx: float, cy: float, c: float, s: float,
                   vx: float, vy: float, omega: float):
        pf = ti.static(self.part.body.pf)
        R = Matrix2x2([[c, -s], [s, c]])
        for k in range(self.part.particle_count):
            i = self.part.indices[k]
            arm = R @ self.part.offset0[k]
            pf[i].pos = Vector2(cx, cy) + arm
            pf[i].vel = Vector2(vx, vy) + omega * Vector2(-arm[1], arm[0])
            pf[i].acc = Vector2(0.0, 0.0)
            pf[i].acc_prior = Vector2(0.0, 0.0)
            pf[i].n = R @ pf[i].n0
