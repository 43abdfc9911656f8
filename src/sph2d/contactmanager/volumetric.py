"""
Contact density against a filled solid.

Each neighbor contributes its reference volume weighted by the kernel, minus
the kernel value at touching distance, so particles one spacing apart do not
push each other.
"""

import taichi as ti

from .contactmodel import ContactDensity


@ti.data_oriented
class ContactDensitySummation(ContactDensity):

    @ti.func
    def density_contribution(self, i, j):
        pf = ti.static(self.body.pf)
        cpf = ti.static(self.contact_body.pf)
        r = ti.max((pf[i].pos - cpf[j].pos).norm(), self.min_distance)
        dp_ij = 0.5 * (ti.sqrt(pf[i].vol0) + ti.sqrt(cpf[j].vol0))
        return ti.max(self.kernel.W(r) - self.kernel.W(dp_ij), 0.0) * cpf[j].vol0
