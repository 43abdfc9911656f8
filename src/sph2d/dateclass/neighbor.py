"""
Neighbor record of a total Lagrangian inner relation.

Kernel values are evaluated once in the reference configuration and kept
for the whole run.
"""

import taichi as ti

#=====================================
# Type Definitions
#=====================================

Vector2 = ti.types.vector(2, float)


@ti.dataclass
class Neighbor:
    """One neighbor j of particle i in the reference configuration."""
    j: int           # Neighbor index within the same body
    dW0: float       # Kernel derivative at the reference distance (<= 0)
    r0: float        # Reference distance |r0_i - r0_j|
    e0: Vector2      # Reference unit vector (r0_i - r0_j) / r0
