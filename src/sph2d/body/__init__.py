"""
Solid bodies and fixed particle regions.

- SolidBody: role-tagged particle body built from a shape and a generator.
- BodyRegionByParticle: fixed subset of a body's particles selected by a shape.
- SolidBodyPartForRigid: region that moves with a rigid body, with its mass properties.
"""

from .solidbody import BodyRole, SolidBody
from .region import BodyRegionByParticle, SolidBodyPartForRigid

__all__ = [
    "BodyRole",
    "SolidBody",
    "BodyRegionByParticle",
    "SolidBodyPartForRigid",
]
