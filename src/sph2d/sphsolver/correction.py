"""
Kernel gradient correction of the reference configuration.

    B_i = ( sum_j V_j (r0_j - r0_i) (x) dW_ij e_ij )^-1

so that the corrected kernel gradient reproduces linear fields exactly.
"""

import taichi as ti

from .inner import InnerRelation
from .utils import *


@ti.data_oriented
class CorrectConfiguration:

    def __init__(self, inner: InnerRelation, min_determinant: float = 1e-3):
        self.inner = inner
        self.body = inner.body
        self.min_determinant = min_determinant

    def exec(self):
        self._correct()

    @ti.kernel
    def _correct(self):
        pf = ti.static(self.body.pf)
        nbr_count = ti.static(self.inner.nbr_count)
        neighbors = ti.static(self.inner.neighbors)
        for i in pf:
            local_configuration = Zero2x2()
            for k in range(nbr_count[i]):
                nb = neighbors[i, k]
                gradW_ijV_j = nb.dW0 * pf[nb.j].vol0 * nb.e0
                local_configuration += (pf[nb.j].pos0 - pf[i].pos0).outer_product(gradW_ijV_j)
            B = Identity2x2()
            # Particles with too few neighbors keep the uncorrected gradient
            if ti.abs(local_configuration.determinant()) > self.min_determinant:
                B = local_configuration.inverse()
            pf[i].B = B
