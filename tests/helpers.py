"""
Small bodies and configurations shared by the tests.
"""

import numpy as np

from sph2d.body import BodyRole, SolidBody
from sph2d.geometry import MultiPolygon, MultiPolygonShape, ShapeBooleanOps
from sph2d.process import ParticleGeneratorLattice
from sph2d.sphconfig import DomainBounds, LinearElasticSolid, SPHSolverConfig


class ArrayGenerator:
    """Generator returning fixed particle positions."""

    def __init__(self, positions, volume):
        self.positions = np.asarray(positions, dtype=float).reshape(-1, 2)
        self.volume = volume

    def generate(self, shape, dp):
        return self.positions.copy(), np.full(self.positions.shape[0], self.volume)


def box_shape(lower, upper, name="Box"):
    return MultiPolygonShape(MultiPolygon().add_a_box(lower, upper), name)


def ring_shape(lower, upper, thickness, name="Ring"):
    multi_polygon = MultiPolygon()
    multi_polygon.add_a_box((lower[0] - thickness, lower[1] - thickness),
                            (upper[0] + thickness, upper[1] + thickness), ShapeBooleanOps.add)
    multi_polygon.add_a_box(lower, upper, ShapeBooleanOps.sub)
    return MultiPolygonShape(multi_polygon, name)


def make_config(dp=0.1, bounds=(-1.0, 3.0, -1.0, 3.0), end_time=1.0, output_interval=0.1):
    return SPHSolverConfig(DomainBounds(*bounds), dp, end_time, output_interval)


def make_box_body(name, lower, upper, config, material=None, role=BodyRole.VOLUMETRIC):
    material = material if material is not None else LinearElasticSolid()
    return SolidBody(name, box_shape(lower, upper, name), material,
                     ParticleGeneratorLattice(), config, role=role)


def make_array_body(name, positions, config, shape=None, material=None, role=BodyRole.VOLUMETRIC):
    positions = np.asarray(positions, dtype=float).reshape(-1, 2)
    if shape is None:
        margin = config.resolution
        shape = box_shape(positions.min(axis=0) - margin, positions.max(axis=0) + margin, name)
    material = material if material is not None else LinearElasticSolid()
    return SolidBody(name, shape, material, ArrayGenerator(positions, config.resolution ** 2),
                     config, role=role)


def pairwise_distances(points):
    diff = points[:, None, :] - points[None, :, :]
    return np.sqrt(np.sum(diff ** 2, axis=2))
