"""
Contact density models.

The receiving particle sums a kernel-weighted contribution from every
contact neighbor. How a neighbor contributes depends on the role of the
contact body: a filled solid (volumetric) or a thin surface (shell).
"""

import taichi as ti

from ..body import BodyRole
from ..kernel import WendlandC2Kernel
from .contactrelation import ContactRelation


@ti.data_oriented
class ContactDensity:

    def __init__(self, relation: ContactRelation, kernel: WendlandC2Kernel):
        self.relation = relation
        self.kernel = kernel
        self.body = relation.body
        self.contact_body = relation.contact_body
        # Floor for coincident particles
        self.min_distance = 1e-6 * relation.body.reference_spacing

    def exec(self):
        """Overwrite contact_density of every receiving particle."""
        self._update()

    @ti.kernel
    def _update(self):
        pf = ti.static(self.body.pf)
        nbr_count = ti.static(self.relation.nbr_count)
        nbr_j = ti.static(self.relation.nbr_j)
        for i in pf:
            sigma = 0.0
            for k in range(nbr_count[i]):
                sigma += self.density_contribution(i, nbr_j[i, k])
            pf[i].contact_density = sigma

    @ti.func
    def density_contribution(self, i, j):
        """
        Contribution of contact particle j to the density of particle i.

        Args:
            i (int): Index in the receiving body
            j (int): Index in the contact body

        Returns:
            Non-negative dimensionless density increment.
        """
        pass


def contact_density_for(relation: ContactRelation, kernel: WendlandC2Kernel) -> ContactDensity:
    """Pick the density model from the contact body's role."""
    from .shell import ShellContactDensity
    from .volumetric import ContactDensitySummation

    if relation.contact_body.role == BodyRole.SHELL:
        return ShellContactDensity(relation, kernel)
    return ContactDensitySummation(relation, kernel)
