"""
Core data structures for total Lagrangian SPH solids.

- Particle: kinematic, constitutive and contact state of one SPH particle.
- Neighbor: one entry of a fixed inner (reference configuration) neighbor list.
"""

from .particle import Particle
from .neighbor import Neighbor

__all__ = [
    "Particle",
    "Neighbor",
]
