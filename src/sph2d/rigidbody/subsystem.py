"""
Rigid body subsystem advanced by an error-controlled Runge-Kutta integrator.

The subsystem is built in three stages:
1. UNINITIALIZED: bodies are added with their mobilities.
2. TOPOLOGY_REALIZED: the body set is frozen, loads and velocities may be set.
3. ADVANCING: entered with the first step and never left.

Every step integrates over exactly the requested interval with
scipy.integrate.solve_ivp and consumes the discrete loads applied before it.
"""

from enum import Enum
from typing import List, Tuple

import numpy as np
from scipy.integrate import solve_ivp

from ..body import SolidBodyPartForRigid
from ..errors import RigidIntegratorError, RigidSubsystemStateError
from .engine import RigidBodyEngine
from .mobility import Mobility
from .rigidbody import RigidBody


class SubsystemState(Enum):
    UNINITIALIZED = 0
    TOPOLOGY_REALIZED = 1
    ADVANCING = 2


class RigidBodySubsystem(RigidBodyEngine):

    def __init__(self, gravity=(0.0, 0.0), accuracy: float = 1e-3):
        if accuracy <= 0.0:
            raise ValueError(f"Integrator accuracy must be positive, got {accuracy}")
        self.gravity = np.asarray(gravity, dtype=float)
        if self.gravity.shape != (2,):
            raise ValueError(f"Gravity must be a 2D vector, got {gravity}")
        self.accuracy = accuracy
        self.bodies: List[RigidBody] = []
        self.state = SubsystemState.UNINITIALIZED
        self.time = 0.0
        self.step_count = 0

    #=====================================
    # Set-up
    #=====================================

    def add_body(self, part: SolidBodyPartForRigid, mobility: Mobility, name: str = None) -> int:
        """Add a body joined to ground by the mobility; returns its index."""
        self._require(SubsystemState.UNINITIALIZED, "add_body")
        self.bodies.append(RigidBody(part, mobility, name))
        return len(self.bodies) - 1

    def realize_topology(self):
        self._require(SubsystemState.UNINITIALIZED, "realize_topology")
        if not self.bodies:
            raise RigidSubsystemStateError("Cannot realize the topology of an empty rigid subsystem")
        self.state = SubsystemState.TOPOLOGY_REALIZED
        print(f"Rigid subsystem realized with {len(self.bodies)} bodies, "
              f"{sum(b.dof for b in self.bodies)} degrees of freedom")

    def set_velocity(self, u, body: int = 0):
        self._require(SubsystemState.TOPOLOGY_REALIZED, "set_velocity")
        self._body(body).set_velocity(u)

    #=====================================
    # RigidBodyEngine
    #=====================================

    def apply_force(self, force, torque: float = 0.0, body: int = 0):
        self._require_realized("apply_force")
        force = np.asarray(force, dtype=float)
        if force.shape != (2,):
            raise ValueError(f"Force must be a 2D vector, got shape {force.shape}")
        state = self._body(body).state
        state.force = force.copy()
        state.torque = float(torque)

    def advance(self, dt: float):
        self._require_realized("advance")
        if dt < 0.0:
            raise ValueError(f"Time step must be non-negative, got {dt}")
        if dt == 0.0:
            return

        self.state = SubsystemState.ADVANCING
        # Loads are constant over the step, so the derivative of u is too
        accelerations = [body.generalized_acceleration(self.gravity) for body in self.bodies]
        y0 = np.concatenate([np.concatenate([b.state.q, b.state.u]) for b in self.bodies])

        def rhs(t, y):
            dydt = np.empty_like(y)
            offset = 0
            for body, acceleration in zip(self.bodies, accelerations):
                dof = body.dof
                dydt[offset:offset + dof] = y[offset + dof:offset + 2 * dof]
                dydt[offset + dof:offset + 2 * dof] = acceleration
                offset += 2 * dof
            return dydt

        # Integrate on [0, dt]: the system is autonomous and this keeps the
        # interval exact for any accumulated time
        sol = solve_ivp(rhs, (0.0, dt), y0, method="RK45",
                        rtol=self.accuracy, atol=self.accuracy * 1e-3,
                        first_step=dt, max_step=dt)
        if not sol.success or not np.all(np.isfinite(sol.y[:, -1])):
            raise RigidIntegratorError(
                f"Rigid integrator failed at t={self.time:.6g} with dt={dt:.6g}: {sol.message}")

        y = sol.y[:, -1]
        offset = 0
        for body in self.bodies:
            dof = body.dof
            body.state.q = y[offset:offset + dof].copy()
            body.state.u = y[offset + dof:offset + 2 * dof].copy()
            body.state.clear_force()
            offset += 2 * dof
        self.time += dt
        self.step_count += 1

    def current_transform(self, body: int = 0) -> Tuple[np.ndarray, float]:
        self._require_realized("current_transform")
        return self._body(body).transform()

    def current_velocity(self, body: int = 0) -> Tuple[np.ndarray, float]:
        self._require_realized("current_velocity")
        return self._body(body).velocity()

    #=====================================
    # Helpers
    #=====================================

    def _body(self, index: int) -> RigidBody:
        if index < 0 or index >= len(self.bodies):
            raise IndexError(f"No rigid body with index {index}")
        return self.bodies[index]

    def _require(self, expected: SubsystemState, action: str):
        if self.state != expected:
            raise RigidSubsystemStateError(
                f"{action} requires state {expected.name}, subsystem is {self.state.name}")

    def _require_realized(self, action: str):
        if self.state == SubsystemState.UNINITIALIZED:
            raise RigidSubsystemStateError(
                f"{action} requires a realized topology, subsystem is {self.state.name}")
