import math
import unittest

import numpy as np

from sph2d.body import BodyRole, SolidBody, SolidBodyPartForRigid
from sph2d.process import ParticleGeneratorLattice
from sph2d.rigidbody import (ConstrainBodyPartByRigid, PlanarMobility, RigidBodySubsystem,
                             TotalForceOnBodyPartForRigid)
from sph2d.sphconfig import NeoHookeanSolid
from .helpers import make_config, pairwise_distances, ring_shape


class TestCouplingBridge(unittest.TestCase):

    def setUp(self):
        self.config = make_config(dp=0.05)
        shape = ring_shape((0.5, 0.5), (1.0, 1.0), 0.05, "Shell")
        self.body = SolidBody("Shell", shape, NeoHookeanSolid(), ParticleGeneratorLattice(),
                              self.config, role=BodyRole.SHELL)
        self.body.initialize_normal_direction_from_body_shape()
        self.part = SolidBodyPartForRigid(self.body, "Shell", shape)
        self.system = RigidBodySubsystem()
        self.index = self.system.add_body(self.part, PlanarMobility())
        self.system.realize_topology()
        self.force_on_rigid = TotalForceOnBodyPartForRigid(self.part, self.system, self.index)
        self.constraint = ConstrainBodyPartByRigid(self.part, self.system, self.index)

    def test_force_and_torque_aggregation(self):
        rng = np.random.default_rng(3)
        forces = rng.normal(size=(self.body.particle_count, 2))
        self.body.pf.contact_force.from_numpy(forces)
        force, torque = self.force_on_rigid.exec()

        arms = self.body.positions() - self.part.mass_center
        np.testing.assert_allclose(force, forces.sum(axis=0), rtol=1e-12, atol=1e-12)
        expected_torque = np.sum(arms[:, 0] * forces[:, 1] - arms[:, 1] * forces[:, 0])
        self.assertAlmostEqual(torque, expected_torque, places=10)
        state = self.system.bodies[self.index].state
        np.testing.assert_allclose(state.force, force)
        self.assertEqual(state.torque, torque)

    def test_region_moves_rigidly(self):
        reference = pairwise_distances(self.body.pf.pos0.to_numpy())
        self.system.set_velocity([0.3, -0.2, 2.0])
        for _ in range(20):
            self.body.pf.contact_force.fill(0.0)
            self.force_on_rigid.exec()
            self.system.advance(5e-3)
            self.constraint.exec()

        x, angle = self.system.current_transform()
        v, omega = self.system.current_velocity()
        self.assertAlmostEqual(angle, 0.2, places=9)
        positions = self.body.positions()
        np.testing.assert_allclose(pairwise_distances(positions), reference, atol=1e-12)

        c, s = math.cos(angle), math.sin(angle)
        R = np.array([[c, -s], [s, c]])
        arms = self.part.initial_offsets() @ R.T
        np.testing.assert_allclose(positions, x + arms, atol=1e-12)
        expected_velocity = v + omega * np.column_stack([-arms[:, 1], arms[:, 0]])
        np.testing.assert_allclose(self.body.velocities(), expected_velocity, atol=1e-12)
        np.testing.assert_allclose(self.body.pf.n.to_numpy(), self.body.pf.n0.to_numpy() @ R.T,
                                   atol=1e-12)
        np.testing.assert_array_equal(self.body.pf.acc.to_numpy(), 0.0)
        np.testing.assert_array_equal(self.body.pf.acc_prior.to_numpy(), 0.0)


if __name__ == '__main__':
    unittest.main()
