"""
Mobilities of a rigid body relative to the ground frame.

A mobility maps its generalized coordinates q and speeds u to the planar
transform and velocity of the body, and projects Cartesian loads onto its
degrees of freedom. All mobilities here have constant diagonal mass
matrices, so the equations of motion are q' = u, u' = Q / M.
"""

from abc import ABC, abstractmethod
from typing import Tuple

import numpy as np


class Mobility(ABC):
    """Base class for mobilizers joining a body to ground at its mass centre."""

    dof: int = 0

    @abstractmethod
    def transform(self, q: np.ndarray, origin: np.ndarray) -> Tuple[np.ndarray, float]:
        pass

    @abstractmethod
    def velocity(self, q: np.ndarray, u: np.ndarray) -> Tuple[np.ndarray, float]:
        pass

    @abstractmethod
    def generalized_force(self, force: np.ndarray, torque: float) -> np.ndarray:
        pass

    @abstractmethod
    def mass_matrix(self, mass: float, inertia: float) -> np.ndarray:
        """Diagonal of the generalized mass matrix."""
        pass


class SliderMobility(Mobility):
    """Translation along a fixed axis, no rotation."""

    dof = 1

    def __init__(self, axis=(1.0, 0.0)):
        axis = np.asarray(axis, dtype=float)
        norm = np.linalg.norm(axis)
        if norm == 0.0:
            raise ValueError("Slider axis must be non-zero")
        self.axis = axis / norm

    def transform(self, q, origin):
        return origin + q[0] * self.axis, 0.0

    def velocity(self, q, u):
        return u[0] * self.axis, 0.0

    def generalized_force(self, force, torque):
        return np.array([np.dot(force, self.axis)])

    def mass_matrix(self, mass, inertia):
        return np.array([mass])


class PinMobility(Mobility):
    """Rotation about the fixed initial mass centre."""

    dof = 1

    def transform(self, q, origin):
        return origin.copy(), q[0]

    def velocity(self, q, u):
        return np.zeros(2), u[0]

    def generalized_force(self, force, torque):
        return np.array([torque])

    def mass_matrix(self, mass, inertia):
        return np.array([inertia])


class PlanarMobility(Mobility):
    """Free planar motion: two translations and one rotation."""

    dof = 3

    def transform(self, q, origin):
        return origin + q[:2], q[2]

    def velocity(self, q, u):
        return u[:2].copy(), u[2]

    def generalized_force(self, force, torque):
        return np.array([force[0], force[1], torque])

    def mass_matrix(self, mass, inertia):
        return np.array([mass, mass, inertia])
