"""
Randomized pairwise viscous damping of an elastic body.

On every call each inner pair is selected with probability `random_ratio`.
A selected pair gets an implicit viscous correction of its relative velocity
with the step dt / random_ratio, so the damping is unbiased in expectation.
Selection depends only on (seed, call index, pair index), and pairs are
updated colour by colour, so the result does not depend on the number of
threads.
"""

import numpy as np
import taichi as ti

from ..sphconfig import DampingProperties
from .graph_coloring import canonicalize_pairs, color_pairs, convert_to_color_groups
from .inner import InnerRelation
from .utils import *


@ti.data_oriented
class PairwiseDamping:

    def __init__(self, inner: InnerRelation, damping: DampingProperties):
        damping.validate()
        self.inner = inner
        self.body = inner.body
        self.kernel = inner.kernel
        self.eta = damping.physical_viscosity
        self.random_ratio = damping.random_ratio
        self.seed = damping.seed
        self.invocation_count = 0

        pairs = canonicalize_pairs(inner.unique_pairs())
        self.pair_count = pairs.shape[0]
        self.pairs_np = pairs
        self.colors = color_pairs(pairs, self.body.particle_count)
        group_pairs, self.group_offsets = convert_to_color_groups(self.colors)
        self.num_colors = len(self.group_offsets) - 1

        positions0 = self.body.pf.pos0.to_numpy()
        ordered = pairs[group_pairs] if self.pair_count > 0 else pairs
        r0 = np.linalg.norm(positions0[ordered[:, 0]] - positions0[ordered[:, 1]], axis=1) \
            if self.pair_count > 0 else np.empty(0)

        size = max(self.pair_count, 1)
        self.pair_i = ti.field(dtype=int, shape=size)
        self.pair_j = ti.field(dtype=int, shape=size)
        self.pair_id = ti.field(dtype=int, shape=size)
        self.pair_r0 = ti.field(dtype=float, shape=size)
        self.pair_dW0 = ti.field(dtype=float, shape=size)
        if self.pair_count > 0:
            self.pair_i.from_numpy(ordered[:, 0].astype(np.int32))
            self.pair_j.from_numpy(ordered[:, 1].astype(np.int32))
            self.pair_id.from_numpy(group_pairs)
            self.pair_r0.from_numpy(r0)
            self.pair_dW0.from_numpy(np.array([self.kernel.dW_host(r) for r in r0]))

    def exec(self, dt: float):
        if self.pair_count == 0 or self.eta == 0.0:
            self.invocation_count += 1
            return
        dt_eff = dt / self.random_ratio
        for c in range(self.num_colors):
            self._damp_color(int(self.group_offsets[c]), int(self.group_offsets[c + 1]),
                             dt_eff, self.invocation_count)
        self.invocation_count += 1

    @ti.kernel
    def _damp_color(self, start: int, end: int, dt_eff: float, counter: int):
        pf = ti.static(self.body.pf)
        for p in range(start, end):
            if hash_uniform(self.seed, counter, self.pair_id[p]) < self.random_ratio:
                i = self.pair_i[p]
                j = self.pair_j[p]
                b = self.eta * pf[i].vol0 * pf[j].vol0 * ti.abs(self.pair_dW0[p]) * dt_eff \
                    / self.pair_r0[p]
                inv_mi = 1.0 / pf[i].mass
                inv_mj = 1.0 / pf[j].mass
                u = (pf[i].vel - pf[j].vel) / (1.0 + b * (inv_mi + inv_mj))
                pf[i].vel -= b * inv_mi * u
                pf[j].vel += b * inv_mj * u
