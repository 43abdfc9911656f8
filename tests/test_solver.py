import os
import tempfile
import unittest

import numpy as np

from sph2d.body import BodyRegionByParticle, BodyRole, SolidBody, SolidBodyPartForRigid
from sph2d.errors import NumericalInstabilityError, RigidIntegratorError
from sph2d.geometry import MultiPolygon, MultiPolygonShape, ShapeBooleanOps
from sph2d.process import (BodyStatesRecording, ParticleGeneratorLattice, plot_snapshots,
                           read_particle_blocks, rigid_body_history)
from sph2d.rigidbody import RigidBodySubsystem, SliderMobility
from sph2d.sphconfig import DomainBounds, LinearElasticSolid, NeoHookeanSolid, SPHSolverConfig
from sph2d.sphsolver import SolverState, SPHSolver
from .helpers import box_shape, pairwise_distances, ring_shape

# Coarse version of the shell box hitting an elastic frame
DL = 1.0
DH = 1.0
dp = 0.05
BW = 4.0 * dp
rigid_gravity = (-150.0, 0.0)


class FailingRigidBodySubsystem(RigidBodySubsystem):

    def __init__(self, fail_at, **kwargs):
        super().__init__(**kwargs)
        self.fail_at = fail_at
        self.calls = 0

    def advance(self, dt):
        if self.calls == self.fail_at:
            raise RigidIntegratorError("step rejected")
        self.calls += 1
        super().advance(dt)


def build_case(end_time, output_interval, output_dir=None, engine_class=RigidBodySubsystem,
               shell_box=((0.1, 0.4), (0.4, 0.7)), part_box=None, gravity=rigid_gravity, **engine_kwargs):
    config = SPHSolverConfig(DomainBounds(-BW, DL + BW, -BW, DH + BW), dp, end_time, output_interval)
    config.set_numerical_parameters(print_interval=0)

    wall_polygon = MultiPolygon()
    wall_polygon.add_a_box((-BW, -BW), (DL + BW, DH + BW), ShapeBooleanOps.add)
    wall_polygon.add_a_box((0.0, 0.0), (DL, DH), ShapeBooleanOps.sub)
    wall = SolidBody("Wall", MultiPolygonShape(wall_polygon, "Wall"), LinearElasticSolid(),
                     ParticleGeneratorLattice(), config)

    shell_shape = ring_shape(shell_box[0], shell_box[1], dp, "FreeBall")
    ball = SolidBody("FreeBall", shell_shape, NeoHookeanSolid(), ParticleGeneratorLattice(), config,
                     role=BodyRole.SHELL)

    holder = BodyRegionByParticle(wall, "Holder", box_shape((DL, -BW), (DL + BW, DH + BW)))
    part_shape = shell_shape if part_box is None else box_shape(part_box[0], part_box[1])
    part = SolidBodyPartForRigid(ball, "FreeBall", part_shape)
    engine = engine_class(gravity=gravity, accuracy=config.rigid_accuracy, **engine_kwargs)
    index = engine.add_body(part, SliderMobility((1.0, 0.0)))
    engine.realize_topology()

    recorder = None
    if output_dir is not None:
        recorder = BodyStatesRecording(output_dir, [ball, wall], engine, rigid_body_count=1,
                                       write_vtk=True)
    solver = SPHSolver(config, wall, ball, holder, part, engine, rigid_body=index, recorder=recorder)
    return solver, wall, ball, holder, engine


class TestCoupledRun(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.folder = tempfile.TemporaryDirectory()
        cls.solver, cls.wall, cls.ball, cls.holder, cls.engine = build_case(
            end_time=0.05, output_interval=0.025, output_dir=cls.folder.name)
        cls.ball_reference = pairwise_distances(cls.ball.pf.pos0.to_numpy())
        cls.solver.run()

    @classmethod
    def tearDownClass(cls):
        cls.folder.cleanup()

    def test_completed(self):
        self.assertEqual(self.solver.state, SolverState.COMPLETED)
        self.assertGreaterEqual(self.solver.clock.time, 0.05)
        self.assertGreater(self.solver.clock.step, 0)
        self.assertGreater(self.solver.computation_time, 0.0)
        self.assertAlmostEqual(self.engine.time, self.solver.clock.time, places=12)

    def test_shell_moves_rigidly(self):
        positions = self.ball.positions()
        np.testing.assert_allclose(pairwise_distances(positions), self.ball_reference, atol=1e-10)
        velocity = self.ball.velocities()
        np.testing.assert_allclose(velocity, np.tile(velocity[0], (velocity.shape[0], 1)), atol=1e-12)
        self.assertEqual(velocity[0, 1], 0.0)

    def test_holder_stays_fixed(self):
        held = self.holder.index_list
        np.testing.assert_array_equal(self.wall.positions()[held], self.wall.pf.pos0.to_numpy()[held])
        np.testing.assert_array_equal(self.wall.velocities()[held], 0.0)

    def test_contact_slows_the_shell_without_tunneling(self):
        v, _ = self.engine.current_velocity()
        self.assertGreater(v[0], rigid_gravity[0] * self.solver.clock.time)
        self.assertGreater(self.ball.positions()[:, 0].min(), 0.0)
        self.assertTrue(np.all(np.isfinite(self.wall.positions())))

    def test_snapshots(self):
        blocks = read_particle_blocks(os.path.join(self.folder.name, "Wall.p4p"))
        self.assertEqual(len(blocks), 3)
        self.assertEqual(blocks[0][0], 0.0)
        self.assertEqual(blocks[0][1].shape, (self.wall.particle_count, 11))
        with open(os.path.join(self.folder.name, "rigid_bodies.dat"), encoding="UTF-8") as fp:
            self.assertEqual(len(fp.readlines()), 4)
        vtk_files = sorted(os.listdir(os.path.join(self.folder.name, "vtk")))
        self.assertEqual(len([f for f in vtk_files if f.startswith("FreeBall_")]), 3)
        with open(os.path.join(self.folder.name, "vtk", vtk_files[0]), encoding="UTF-8") as fp:
            self.assertIn("DATASET POLYDATA", fp.read())

    def test_plots_and_history(self):
        files = [os.path.join(self.folder.name, f"{name}.p4p") for name in ("FreeBall", "Wall")]
        frames = plot_snapshots(files, os.path.join(self.folder.name, "frames"))
        self.assertEqual(len(frames), 3)
        self.assertTrue(all(os.path.exists(f) for f in frames))
        history = rigid_body_history(os.path.join(self.folder.name, "rigid_bodies.dat"))
        self.assertEqual(history.shape, (3, 8))
        self.assertEqual(history[0, 1], 0.0)
        self.assertLess(history[-1, 2], history[0, 2])


class TestShellStopsAtWall(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        cls.solver, cls.wall, cls.ball, _, cls.engine = build_case(end_time=0.3, output_interval=0.3)
        cls.solver.initialize()
        cls.min_x = []
        cls.approach_speed = []
        cls.wall_density = []
        while cls.solver.clock.time < 0.3:
            cls.solver.run_sub_step()
            v, _ = cls.engine.current_velocity()
            cls.min_x.append(cls.ball.positions()[:, 0].min())
            cls.approach_speed.append(-v[0])
            cls.wall_density.append(cls.wall.pf.contact_density.to_numpy().max())
        cls.min_x = np.array(cls.min_x)
        cls.approach_speed = np.array(cls.approach_speed)
        cls.wall_density = np.array(cls.wall_density)

    def test_shell_never_crosses_the_inner_wall(self):
        self.assertTrue(np.all(self.min_x > 0.0), f"min x reached {self.min_x.min()}")

    def test_contact_decelerates_the_approach(self):
        touching = np.nonzero(self.wall_density > 0.0)[0]
        self.assertGreater(touching.size, 0)
        first = touching[0]
        # Free fall until the first contact
        self.assertGreater(self.approach_speed[first], 0.0)
        peak = self.approach_speed[first:].max()
        self.assertLess(self.approach_speed[-1], peak)
        self.assertLess(self.approach_speed[-1], -rigid_gravity[0] * self.solver.clock.time)


class TestSeparatedBodies(unittest.TestCase):

    def test_no_contact_leaves_the_wall_untouched(self):
        solver, wall, ball, _, _ = build_case(end_time=0.01, output_interval=0.005,
                                              shell_box=((0.4, 0.4), (0.6, 0.6)), gravity=(0.0, 0.0))
        reference = wall.pf.pos0.to_numpy()
        solver.initialize()
        while solver.clock.time < 0.01:
            solver.run_sub_step()
            for body in (wall, ball):
                np.testing.assert_array_equal(body.pf.contact_density.to_numpy(), 0.0)
                np.testing.assert_array_equal(body.pf.contact_force.to_numpy(), 0.0)
            np.testing.assert_array_equal(wall.positions(), reference)
            np.testing.assert_array_equal(wall.velocities(), 0.0)
        self.assertGreater(solver.clock.step, 0)


class TestPartiallyCoupledShell(unittest.TestCase):

    def test_prior_acceleration_is_reset_outside_the_rigid_part(self):
        # Left column at x = 0.015 penetrates the wall, the rigid part covers only x > 0.2
        solver, wall, ball, _, _ = build_case(end_time=0.01, output_interval=0.01,
                                              shell_box=((0.04, 0.4), (0.34, 0.7)),
                                              part_box=((0.2, 0.3), (0.5, 0.8)))
        solver.initialize()
        free = np.setdiff1d(np.arange(ball.particle_count), solver.constrain_rigid_part.part.index_list)
        for _ in range(3):
            solver.run_sub_step()
        force = ball.pf.contact_force.to_numpy()[free]
        mass = ball.pf.mass.to_numpy()[free]
        self.assertTrue(np.any(np.abs(force) > 0.0))
        np.testing.assert_allclose(ball.pf.acc_prior.to_numpy()[free], force / mass[:, None],
                                   rtol=1e-12, atol=0.0)


class TestSolverFailures(unittest.TestCase):

    def test_sub_step_needs_initialization(self):
        solver = build_case(0.01, 0.01)[0]
        with self.assertRaises(RuntimeError):
            solver.run_sub_step()

    def test_stability_checks(self):
        solver, wall = build_case(0.01, 0.01)[:2]
        solver.initialize()
        bound = solver.get_time_step_size.last_bound
        self.assertEqual(solver.clock.dt, bound)
        solver.check_stability(bound)
        with self.assertRaises(NumericalInstabilityError):
            solver.check_stability(2.0 * bound)
        with self.assertRaises(NumericalInstabilityError):
            solver.check_stability(0.0)
        with self.assertRaises(NumericalInstabilityError):
            solver.check_stability(float("nan"))
        wall.pf.vel[0] = [np.nan, 0.0]
        with self.assertRaises(NumericalInstabilityError):
            solver.check_stability(bound)

    def test_step_above_the_bound_is_fatal(self):
        solver = build_case(0.01, 0.01)[0]
        solver.initialize()
        bound = solver.get_time_step_size.last_bound
        solver.clock.dt = 50.0 * bound
        with self.assertRaises(NumericalInstabilityError):
            solver.run_sub_step()
        self.assertEqual(solver.clock.step, 0)
        self.assertEqual(solver.clock.time, 0.0)

    def test_fatal_error_names_the_sub_step(self):
        solver = build_case(0.01, 0.01, engine_class=FailingRigidBodySubsystem, fail_at=2)[0]
        with self.assertRaises(RigidIntegratorError) as context:
            solver.run()
        self.assertIn("Sub-step 2", str(context.exception))
        self.assertEqual(solver.state, SolverState.RUNNING)


if __name__ == '__main__':
    unittest.main()
