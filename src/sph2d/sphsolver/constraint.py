"""
Holder constraint: particles of a region stay at their reference position at rest.
"""

import taichi as ti

from ..body import BodyRegionByParticle
from .utils import *


@ti.data_oriented
class ConstrainSolidBodyRegion:

    def __init__(self, region: BodyRegionByParticle):
        self.region = region
        self.body = region.body

    def exec(self):
        self._constrain()

    @ti.kernel
    def _constrain(self):
        pf = ti.static(self.body.pf)
        for k in self.region.indices:
            i = self.region.indices[k]
            pf[i].pos = pf[i].pos0
            pf[i].vel = Vector2(0.0, 0.0)
            pf[i].acc = Vector2(0.0, 0.0)
