"""
Contact density against a thin shell.

A shell particle is a single layer, which alone would give a far smaller
density than a filled solid. The receiving particle therefore thickens each
shell neighbor into a virtual column of depth 2h behind it, along its own
current normal, and integrates the kernel over that column with 3-point
Gauss-Legendre quadrature. The neighbor's reference spacing is the column
width. The same integral for a neighbor at touching distance straight along
the normal is subtracted as the offset.
"""

import math

import taichi as ti

from .contactmodel import ContactDensity

# Gauss-Legendre points and weights on [-1, 1]
GAUSS_POINTS = (-math.sqrt(0.6), 0.0, math.sqrt(0.6))
GAUSS_WEIGHTS = (5.0 / 9.0, 8.0 / 9.0, 5.0 / 9.0)


@ti.data_oriented
class ShellContactDensity(ContactDensity):

    def __init__(self, relation, kernel):
        super().__init__(relation, kernel)
        self.depth = kernel.cutoff

    @ti.func
    def density_contribution(self, i, j):
        pf = ti.static(self.body.pf)
        cpf = ti.static(self.contact_body.pf)
        n_i = pf[i].n
        dl = ti.sqrt(cpf[j].vol0)
        dp_ij = 0.5 * (ti.sqrt(pf[i].vol0) + dl)
        sigma = 0.0
        offset = 0.0
        for l in ti.static(range(3)):
            s = 0.5 * self.depth * (1.0 + GAUSS_POINTS[l])
            weight = 0.5 * self.depth * GAUSS_WEIGHTS[l]
            # Shell is rigid: current and reference shapes match up to a rigid transform
            q = cpf[j].pos + s * n_i
            r = ti.max((pf[i].pos - q).norm(), self.min_distance)
            sigma += weight * self.kernel.W(r)
            offset += weight * self.kernel.W(dp_ij + s)
        return ti.max(sigma - offset, 0.0) * dl
