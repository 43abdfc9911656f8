"""
Rigid body state and its mass properties.
"""

from dataclasses import dataclass, field

import numpy as np

from ..body import SolidBodyPartForRigid
from .mobility import Mobility


@dataclass
class RigidBodyState:
    """Generalized coordinates and speeds plus the pending discrete load."""
    q: np.ndarray
    u: np.ndarray
    force: np.ndarray = field(default_factory=lambda: np.zeros(2))
    torque: float = 0.0

    def clear_force(self):
        self.force = np.zeros(2)
        self.torque = 0.0


class RigidBody:
    """
    A rigid body with the mass properties of the particle region it models.

    The body frame origin is the region's initial mass centre; the mobility
    joins it to ground there.
    """

    def __init__(self, part: SolidBodyPartForRigid, mobility: Mobility, name: str = None):
        if part.mass <= 0.0:
            raise ValueError(f"Rigid body {part.name} has non-positive mass")
        self.name = name if name is not None else part.name
        self.part = part
        self.mobility = mobility
        self.mass = part.mass
        self.inertia = part.inertia
        self.origin = np.array(part.mass_center, dtype=float)
        self.mass_diagonal = mobility.mass_matrix(self.mass, self.inertia)
        if np.any(self.mass_diagonal <= 0.0):
            raise ValueError(f"Rigid body {self.name} has a singular mass matrix")
        self.state = RigidBodyState(q=np.zeros(mobility.dof), u=np.zeros(mobility.dof))

    @property
    def dof(self) -> int:
        return self.mobility.dof

    def transform(self, q=None):
        return self.mobility.transform(self.state.q if q is None else q, self.origin)

    def velocity(self):
        return self.mobility.velocity(self.state.q, self.state.u)

    def generalized_acceleration(self, gravity: np.ndarray) -> np.ndarray:
        """u' for the current discrete load plus gravity; constant over a step."""
        load = self.state.force + self.mass * gravity
        return self.mobility.generalized_force(load, self.state.torque) / self.mass_diagonal

    def set_velocity(self, u):
        u = np.asarray(u, dtype=float)
        if u.shape != (self.dof,):
            raise ValueError(f"Expected {self.dof} generalized speeds, got shape {u.shape}")
        self.state.u = u.copy()
