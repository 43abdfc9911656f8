"""
Adaptive acoustic time step.

    dt_i = CFL * min(h / (c0 + |v_i|), sqrt(h / (|a_i| + tiny)))

with a the total acceleration; the global step is the minimum over the body.
"""

import taichi as ti

from ..body import SolidBody
from ..sphconfig import SPHSolverConfig
from .utils import *


@ti.data_oriented
class AcousticTimeStepSize:

    def __init__(self, body: SolidBody, config: SPHSolverConfig):
        self.body = body
        self.cfl = config.acoustic_cfl
        self.h = config.smoothing_length
        self.c0 = body.material.sound_speed
        self.dt_min = ti.field(dtype=float, shape=())
        self.last_bound = float("inf")

    def exec(self) -> float:
        """Return the admissible step and remember it as the last bound."""
        self.dt_min[None] = float("inf")
        self._reduce()
        self.last_bound = float(self.dt_min[None])
        return self.last_bound

    @ti.kernel
    def _reduce(self):
        pf = ti.static(self.body.pf)
        for i in pf:
            speed = pf[i].vel.norm()
            acceleration = (pf[i].acc + pf[i].acc_prior).norm()
            dt_acoustic = self.h / (self.c0 + speed)
            dt_force = ti.sqrt(self.h / (acceleration + TinyReal))
            ti.atomic_min(self.dt_min[None], self.cfl * ti.min(dt_acoustic, dt_force))
