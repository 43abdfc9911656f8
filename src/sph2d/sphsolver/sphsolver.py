"""
Coupled time stepping of an elastic body in contact with a rigid-coupled body.

One sub-step runs, in this order:
1. Check dt against the acoustic bound of the current state, reset the prior
   acceleration of the elastic body to the body force and of the contact
   body to zero.
2. Contact densities of both directions, then contact forces of both.
3. Contact force resultant to the rigid body, rigid step by dt, rigid
   kinematics imposed on the coupled region.
4. Stress relaxation first half, holder constraint, pairwise damping,
   holder constraint, stress relaxation second half.
5. Cell linked lists and contact topologies rebuilt from the new positions.
6. Clock advanced by dt, next dt from the acoustic criterion.
"""

import math
import time
from enum import Enum

import numpy as np

from ..body import BodyRegionByParticle, SolidBody, SolidBodyPartForRigid
from ..contactmanager import ContactForce, ContactRelation, contact_density_for
from ..errors import NumericalInstabilityError, SPHError
from ..kernel import WendlandC2Kernel
from ..rigidbody import ConstrainBodyPartByRigid, RigidBodyEngine, TotalForceOnBodyPartForRigid
from ..sphconfig import SPHSolverConfig
from .clock import SimulationClock
from .constraint import ConstrainSolidBodyRegion
from .correction import CorrectConfiguration
from .damping import PairwiseDamping
from .inner import InnerRelation
from .stressrelaxation import StressRelaxationFirstHalf, StressRelaxationSecondHalf
from .timestep import AcousticTimeStepSize


class SolverState(Enum):
    INITIALIZING = 0
    RUNNING = 1
    COMPLETED = 2


class SPHSolver:
    """
    Outer simulation loop.

    Args:
        config: Solver configuration
        body: Elastic body integrated by stress relaxation
        contact_body: Body driven by the rigid body engine
        holder: Region of `body` held fixed at its reference position
        rigid_part: Region of `contact_body` represented by a rigid body
        engine: Rigid body engine with a realized topology
        rigid_body: Index of the rigid body within the engine
        recorder: Optional snapshot writer with write_to_file(step, time)
    """

    def __init__(self, config: SPHSolverConfig, body: SolidBody, contact_body: SolidBody,
                 holder: BodyRegionByParticle, rigid_part: SolidBodyPartForRigid,
                 engine: RigidBodyEngine, rigid_body: int = 0, recorder=None):
        config.validate()
        if holder.body is not body:
            raise ValueError(f"Holder region {holder.name} does not belong to body {body.name}")
        if rigid_part.body is not contact_body:
            raise ValueError(f"Rigid part {rigid_part.name} does not belong to body {contact_body.name}")

        self.config = config
        self.body = body
        self.contact_body = contact_body
        self.engine = engine
        self.recorder = recorder
        self.state = SolverState.INITIALIZING

        self.kernel = WendlandC2Kernel(config.smoothing_length)

        # Elastic body dynamics
        self.inner = InnerRelation(body, self.kernel)
        self.corrected_configuration = CorrectConfiguration(self.inner)
        self.stress_relaxation_first_half = StressRelaxationFirstHalf(self.inner)
        self.stress_relaxation_second_half = StressRelaxationSecondHalf(self.inner)
        self.constrain_holder = ConstrainSolidBodyRegion(holder)
        self.damping = None  # needs the inner pairs, built in initialize()
        self.get_time_step_size = AcousticTimeStepSize(body, config)

        # Contact in both directions
        self.body_contact = ContactRelation(body, contact_body)
        self.contact_body_contact = ContactRelation(contact_body, body)
        self.body_update_contact_density = contact_density_for(self.body_contact, self.kernel)
        self.contact_body_update_contact_density = contact_density_for(self.contact_body_contact, self.kernel)
        self.body_compute_contact_forces = ContactForce(self.body_contact, self.kernel)
        self.contact_body_compute_contact_forces = ContactForce(self.contact_body_contact, self.kernel)

        # Rigid coupling
        self.force_on_rigid = TotalForceOnBodyPartForRigid(rigid_part, engine, rigid_body)
        self.constrain_rigid_part = ConstrainBodyPartByRigid(rigid_part, engine, rigid_body)

        self.clock = SimulationClock(config.output_interval)
        self.computation_time = 0.0

    #=====================================
    # Initializing
    #=====================================

    def initialize(self):
        if self.state != SolverState.INITIALIZING:
            raise RuntimeError(f"Solver already initialized, state is {self.state.name}")
        print(self.config.summary())

        self.inner.initialize_configuration()
        self.body.update_cell_linked_list()
        self.contact_body.update_cell_linked_list()
        self.body_contact.update_configuration()
        self.contact_body_contact.update_configuration()

        self.body.initialize_normal_direction_from_body_shape()
        self.contact_body.initialize_normal_direction_from_body_shape()
        self.corrected_configuration.exec()
        self.damping = PairwiseDamping(self.inner, self.config.damping)
        print(f"Pairwise damping: {self.damping.pair_count} pairs in {self.damping.num_colors} colors")

        self.body.initialize_time_step(*self.config.gravity)
        self.clock.dt = self.get_time_step_size.exec()
        self.check_stability(self.clock.dt)

        self.state = SolverState.RUNNING
        if self.recorder is not None:
            self.recorder.write_to_file(self.clock.step, self.clock.time)

    #=====================================
    # Running
    #=====================================

    def run_sub_step(self) -> float:
        """Advance by one sub-step of the current dt; returns the dt used."""
        if self.state != SolverState.RUNNING:
            raise RuntimeError(f"Sub-steps need a running solver, state is {self.state.name}")
        dt = self.clock.dt
        # last_bound belongs to the current state, dt must not exceed it
        self.check_stability(dt)

        self.body.initialize_time_step(*self.config.gravity)
        self.contact_body.initialize_time_step(0.0, 0.0)

        self.body_update_contact_density.exec()
        self.contact_body_update_contact_density.exec()
        self.body_compute_contact_forces.exec()
        self.contact_body_compute_contact_forces.exec()

        self.force_on_rigid.exec()
        self.engine.advance(dt)
        self.constrain_rigid_part.exec()

        self.stress_relaxation_first_half.exec(dt)
        self.constrain_holder.exec()
        self.damping.exec(dt)
        self.constrain_holder.exec()
        self.stress_relaxation_second_half.exec(dt)

        self.body.update_cell_linked_list()
        self.contact_body.update_cell_linked_list()
        self.body_contact.update_configuration()
        self.contact_body_contact.update_configuration()

        self.clock.advance(dt)
        next_dt = self.get_time_step_size.exec()
        self.check_stability(next_dt)
        self.clock.dt = next_dt
        return dt

    def check_stability(self, dt: float):
        """Raise NumericalInstabilityError on an unusable step or non-finite state."""
        bound = self.get_time_step_size.last_bound
        if not math.isfinite(dt) or dt <= 0.0:
            raise NumericalInstabilityError(f"Time step is not a positive finite number: {dt}")
        if dt > bound * (1.0 + 1e-12):
            raise NumericalInstabilityError(f"Time step {dt} exceeds the acoustic bound {bound}")
        for body in (self.body, self.contact_body):
            if not (np.all(np.isfinite(body.velocities())) and np.all(np.isfinite(body.positions()))):
                raise NumericalInstabilityError(f"Non-finite particle state in body {body.name}")

    def run(self):
        """Run to the end time, writing a snapshot after every output interval."""
        if self.state == SolverState.INITIALIZING:
            self.initialize()
        if self.state != SolverState.RUNNING:
            raise RuntimeError(f"Cannot run a solver in state {self.state.name}")

        clock = self.clock
        print_interval = self.config.print_interval
        io_time = 0.0
        t1 = time.time()
        while clock.time < self.config.end_time:
            while not clock.output_due():
                if print_interval > 0 and clock.step % print_interval == 0:
                    print(f"N={clock.step} Time: {clock.time:.6f}\tdt: {clock.dt:.6e}")
                step, t = clock.step, clock.time
                try:
                    self.run_sub_step()
                except SPHError as error:
                    raise type(error)(f"Sub-step {step} at t = {t:.6g}: {error}") from error
            clock.schedule_next_output()
            if self.recorder is not None:
                t2 = time.time()
                self.recorder.write_to_file(clock.step, clock.time)
                io_time += time.time() - t2
        self.computation_time += time.time() - t1 - io_time
        self.state = SolverState.COMPLETED
        print(f"Total wall time for computation: {self.computation_time:.3f} seconds.")
