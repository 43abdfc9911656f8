import math
import unittest

from sph2d.sphconfig import (DampingProperties, DomainBounds, LinearElasticSolid, NeoHookeanSolid,
                             RunModeFlags, SPHSolverConfig)
from sph2d.sphsolver import SimulationClock


class TestSPHSolverConfig(unittest.TestCase):

    def setUp(self):
        self.domain = DomainBounds(-0.1, 4.1, -0.1, 4.1)

    def test_defaults(self):
        config = SPHSolverConfig(self.domain, 0.025, 10.0, 0.1)
        self.assertAlmostEqual(config.smoothing_length, 1.3 * 0.025)
        self.assertAlmostEqual(config.cutoff_radius, 2.6 * 0.025)
        self.assertEqual(config.acoustic_cfl, 0.6)
        self.assertEqual(config.damping.random_ratio, 0.5)
        self.assertEqual(config.damping.physical_viscosity, 200.0)
        self.assertEqual(config.rigid_accuracy, 1e-3)
        self.assertAlmostEqual(config.domain_min[0], -0.1 - config.cutoff_radius)
        self.assertIn("Resolution: 0.025", config.summary())

    def test_invalid_arguments(self):
        with self.assertRaises(ValueError):
            SPHSolverConfig(self.domain, 0.0, 10.0, 0.1)
        with self.assertRaises(ValueError):
            SPHSolverConfig(self.domain, 0.025, -1.0, 0.1)
        with self.assertRaises(ValueError):
            SPHSolverConfig(self.domain, 0.025, 1.0, 2.0)
        with self.assertRaises(ValueError):
            DomainBounds(1.0, 0.0, 0.0, 1.0)

    def test_setters(self):
        config = SPHSolverConfig(self.domain, 0.025, 10.0, 0.1)
        self.assertIs(config.set_numerical_parameters(acoustic_cfl=0.3, smoothing_length_ratio=1.5), config)
        self.assertAlmostEqual(config.cutoff_radius, 3.0 * 0.025)
        self.assertAlmostEqual(config.domain_min[1], -0.1 - 3.0 * 0.025)
        config.set_damping_properties(seed=9)
        self.assertEqual(config.damping.seed, 9)
        with self.assertRaises(ValueError):
            config.set_numerical_parameters(courant=0.5)
        with self.assertRaises(ValueError):
            config.set_numerical_parameters(acoustic_cfl=1.5)
        with self.assertRaises(ValueError):
            config.set_damping_properties(viscosity=1.0)
        with self.assertRaises(ValueError):
            config.set_damping_properties(random_ratio=0.0)

    def test_run_mode(self):
        with self.assertRaises(ValueError):
            SPHSolverConfig(self.domain, 0.025, 10.0, 0.1, run_mode=RunModeFlags(restart_step=10))
        config = SPHSolverConfig(self.domain, 0.025, 10.0, 0.1,
                                 run_mode=RunModeFlags(reload_particles=True))
        self.assertTrue(config.run_mode.reload_particles)

    def test_damping_validation(self):
        with self.assertRaises(ValueError):
            DampingProperties(physical_viscosity=-1.0).validate()
        with self.assertRaises(ValueError):
            DampingProperties(seed=-1).validate()


class TestMaterials(unittest.TestCase):

    def test_moduli(self):
        material = LinearElasticSolid(rho0=1.0, youngs_modulus=5e4, poisson_ratio=0.45)
        K = 5e4 / (3.0 * (1.0 - 0.9))
        self.assertAlmostEqual(material.bulk_modulus, K)
        self.assertAlmostEqual(material.shear_modulus, 5e4 / 2.9)
        self.assertAlmostEqual(material.sound_speed, math.sqrt(K))
        self.assertAlmostEqual(material.contact_stiffness, K)
        self.assertAlmostEqual(material.lambda0, K - 2.0 / 3.0 * material.shear_modulus, places=6)
        self.assertEqual(material.get_model_name(), "linear")
        self.assertEqual(NeoHookeanSolid().get_model_name(), "neohookean")

    def test_validation(self):
        with self.assertRaises(ValueError):
            LinearElasticSolid(poisson_ratio=0.5).validate()
        with self.assertRaises(ValueError):
            NeoHookeanSolid(rho0=0.0).validate()
        with self.assertRaises(ValueError):
            NeoHookeanSolid(youngs_modulus=-1.0).validate()


class TestSimulationClock(unittest.TestCase):

    def test_output_schedule(self):
        clock = SimulationClock(0.1)
        self.assertFalse(clock.output_due())
        clock.advance(0.06)
        clock.advance(0.06)
        self.assertEqual(clock.step, 2)
        self.assertTrue(clock.output_due())
        clock.schedule_next_output()
        self.assertAlmostEqual(clock.next_output_time, 0.2)
        self.assertFalse(clock.output_due())

    def test_invalid_interval(self):
        with self.assertRaises(ValueError):
            SimulationClock(0.0)


if __name__ == '__main__':
    unittest.main()
