"""
Narrow interface between the particle solver and a rigid body engine.

The coupling only hands over a discrete force and torque per body and reads
back a transform and a velocity, so any integrator honouring these four
calls can drive the rigid-coupled particle regions.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np


class RigidBodyEngine(ABC):

    @abstractmethod
    def advance(self, dt: float):
        """Advance all bodies by dt, consuming the applied discrete forces."""
        pass

    @abstractmethod
    def apply_force(self, force, torque: float = 0.0, body: int = 0):
        """Set the discrete force and torque (about the mass centre) for the next step."""
        pass

    @abstractmethod
    def current_transform(self, body: int = 0) -> Tuple[np.ndarray, float]:
        """Mass centre position and rotation angle."""
        pass

    @abstractmethod
    def current_velocity(self, body: int = 0) -> Tuple[np.ndarray, float]:
        """Linear velocity of the mass centre and angular velocity."""
        pass
