"""
Two-phase explicit stress relaxation of a total Lagrangian elastic body.

First half:  half position step, half deformation step, stress from the
             current deformation, then a full velocity step from the stress
             divergence and the prior (body + contact) acceleration.
Second half: half position step with the new velocity, deformation rate from
             the velocity gradient, half deformation step, normal update.

Each phase writes only the particle's own state; neighbor data read inside a
phase was completed by the previous kernel launch.
"""

import taichi as ti

from .inner import InnerRelation
from .utils import *


@ti.data_oriented
class StressRelaxationFirstHalf:

    def __init__(self, inner: InnerRelation):
        self.inner = inner
        self.body = inner.body
        material = inner.body.material
        self.lambda0 = material.lambda0
        self.G0 = material.shear_modulus
        self.neohookean = material.get_model_name() == "neohookean"

    def exec(self, dt: float):
        self._initialization(dt)
        self._interaction_update(dt)

    @ti.func
    def stress_PK2(self, F):
        S = Zero2x2()
        if ti.static(self.neohookean):
            S = stress_PK2_neohookean(F, self.lambda0, self.G0)
        else:
            S = stress_PK2_linear(F, self.lambda0, self.G0)
        return S

    @ti.kernel
    def _initialization(self, dt: float):
        pf = ti.static(self.body.pf)
        for i in pf:
            pf[i].pos += 0.5 * dt * pf[i].vel
            pf[i].F += 0.5 * dt * pf[i].dF_dt
            F = pf[i].F
            pf[i].rho = pf[i].rho0 / F.determinant()
            pf[i].stress_PK1_B = F @ self.stress_PK2(F) @ pf[i].B

    @ti.kernel
    def _interaction_update(self, dt: float):
        pf = ti.static(self.body.pf)
        nbr_count = ti.static(self.inner.nbr_count)
        neighbors = ti.static(self.inner.neighbors)
        for i in pf:
            acceleration = Vector2(0.0, 0.0)
            for k in range(nbr_count[i]):
                nb = neighbors[i, k]
                acceleration += (pf[i].stress_PK1_B + pf[nb.j].stress_PK1_B) @ nb.e0 \
                    * nb.dW0 * pf[nb.j].vol0
            pf[i].acc = acceleration / pf[i].rho0
            pf[i].vel += (pf[i].acc + pf[i].acc_prior) * dt


@ti.data_oriented
class StressRelaxationSecondHalf:

    def __init__(self, inner: InnerRelation):
        self.inner = inner
        self.body = inner.body

    def exec(self, dt: float):
        self._update(dt)

    @ti.kernel
    def _update(self, dt: float):
        pf = ti.static(self.body.pf)
        nbr_count = ti.static(self.inner.nbr_count)
        neighbors = ti.static(self.inner.neighbors)
        for i in pf:
            pf[i].pos += 0.5 * dt * pf[i].vel
            deformation_gradient_change_rate = Zero2x2()
            for k in range(nbr_count[i]):
                nb = neighbors[i, k]
                gradw_ij = nb.dW0 * pf[nb.j].vol0 * nb.e0
                deformation_gradient_change_rate -= (pf[i].vel - pf[nb.j].vel).outer_product(gradw_ij)
            pf[i].dF_dt = deformation_gradient_change_rate @ pf[i].B
            pf[i].F += 0.5 * dt * pf[i].dF_dt
            n = pf[i].F.inverse().transpose() @ pf[i].n0
            pf[i].n = n / ti.max(n.norm(), TinyReal)
