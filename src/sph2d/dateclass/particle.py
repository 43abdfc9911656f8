"""
Particle data structure for 2D total Lagrangian SPH solids.

A particle keeps its reference position and volume for the whole run; the
current configuration is tracked through position and deformation gradient.
"""

import taichi as ti

#=====================================
# Type Definitions
#=====================================

Vector2 = ti.types.vector(2, float)
Matrix2x2 = ti.types.matrix(2, 2, float)


@ti.dataclass
class Particle:
    """Represents one SPH particle of an elastic or rigid-coupled solid."""
    ID: int                   # Unique particle identifier within its body

    mass: float               # Reference mass
    vol0: float               # Reference volume
    rho0: float               # Reference density
    rho: float                # Current density, rho0 / det(F)

    # Kinematics (global coordinates)
    pos: Vector2              # Current position
    pos0: Vector2             # Reference position
    vel: Vector2              # Velocity
    acc: Vector2              # Acceleration from internal stress
    acc_prior: Vector2        # Acceleration from body and contact forces

    # Constitutive state
    F: Matrix2x2              # Deformation gradient
    dF_dt: Matrix2x2          # Rate of the deformation gradient
    stress_PK1_B: Matrix2x2   # First Piola-Kirchhoff stress times B
    B: Matrix2x2              # Configuration correction matrix

    # Surface normal (used when the body is contacted as a shell)
    n: Vector2                # Current normal
    n0: Vector2               # Reference normal

    # Contact
    contact_density: float    # Compression measure against the other body
    contact_force: Vector2    # Repulsive force from the other body
