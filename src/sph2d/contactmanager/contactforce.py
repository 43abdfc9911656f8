"""
Repulsive contact force from the contact densities of both bodies.

    f_i = - sum_j 2 p*_ij V_i V_j dW(r_ij) e_ij,   p*_ij = (K_i sigma_i + K_j sigma_j) / 2

with K = rho0 c0^2 of each material. dW <= 0 and p* >= 0, so the force on i
always points away from j. Both bodies' densities must be current.
"""

import taichi as ti

from ..kernel import WendlandC2Kernel
from .contactrelation import ContactRelation

#=====================================
# Type Definitions
#=====================================

Vector2 = ti.types.vector(2, float)


@ti.data_oriented
class ContactForce:

    def __init__(self, relation: ContactRelation, kernel: WendlandC2Kernel):
        self.relation = relation
        self.kernel = kernel
        self.body = relation.body
        self.contact_body = relation.contact_body
        self.stiffness = relation.body.material.contact_stiffness
        self.contact_stiffness = relation.contact_body.material.contact_stiffness
        # Pairs closer than this have no usable direction and are skipped
        self.min_distance = 1e-6 * relation.body.reference_spacing

    def exec(self):
        """Overwrite contact_force and add f / m to acc_prior."""
        self._interaction()

    @ti.kernel
    def _interaction(self):
        pf = ti.static(self.body.pf)
        cpf = ti.static(self.contact_body.pf)
        nbr_count = ti.static(self.relation.nbr_count)
        nbr_j = ti.static(self.relation.nbr_j)
        for i in pf:
            p_i = self.stiffness * pf[i].contact_density
            force = Vector2(0.0, 0.0)
            for k in range(nbr_count[i]):
                j = nbr_j[i, k]
                r_ij = pf[i].pos - cpf[j].pos
                r = r_ij.norm()
                if r > self.min_distance:
                    e_ij = r_ij / r
                    p_star = 0.5 * (p_i + self.contact_stiffness * cpf[j].contact_density)
                    force -= 2.0 * p_star * pf[i].vol0 * cpf[j].vol0 * self.kernel.dW(r) * e_ij
            pf[i].contact_force = force
            pf[i].acc_prior += force / pf[i].mass
