import unittest

import numpy as np

from sph2d.geometry import MultiPolygon, MultiPolygonShape, ShapeBooleanOps


class TestMultiPolygonShape(unittest.TestCase):

    def setUp(self):
        multi_polygon = MultiPolygon()
        multi_polygon.add_a_box((-0.1, -0.1), (1.1, 1.1), ShapeBooleanOps.add)
        multi_polygon.add_a_box((0.0, 0.0), (1.0, 1.0), ShapeBooleanOps.sub)
        self.frame = MultiPolygonShape(multi_polygon, "Frame")

    def test_polygon_is_closed(self):
        multi_polygon = MultiPolygon().add_a_polygon([(0, 0), (1, 0), (1, 1)])
        vertices, op = multi_polygon.polygons[0]
        self.assertEqual(vertices.shape, (4, 2))
        np.testing.assert_array_equal(vertices[0], vertices[-1])
        self.assertEqual(op, ShapeBooleanOps.add)

    def test_polygon_needs_three_vertices(self):
        with self.assertRaises(ValueError):
            MultiPolygon().add_a_polygon([(0, 0), (1, 0)])

    def test_empty_shape_rejected(self):
        with self.assertRaises(ValueError):
            MultiPolygonShape(MultiPolygon())

    def test_boolean_containment(self):
        points = np.array([[-0.05, 0.5], [0.5, 0.5], [1.05, 1.05], [1.5, 0.5], [0.5, -0.05]])
        np.testing.assert_array_equal(self.frame.contains(points), [True, False, True, False, True])

    def test_bounding_box_uses_added_polygons(self):
        lower, upper = self.frame.bounding_box()
        np.testing.assert_allclose(lower, [-0.1, -0.1])
        np.testing.assert_allclose(upper, [1.1, 1.1])

    def test_normals_point_out_of_the_solid(self):
        points = np.array([
            [-0.08, 0.5],   # left bar, closest to outer face
            [-0.02, 0.5],   # left bar, closest to inner face
            [0.5, 1.02],    # top bar, inner face
            [0.5, 1.08],    # top bar, outer face
        ])
        normals = self.frame.find_normal_direction(points)
        np.testing.assert_allclose(normals, [[-1, 0], [1, 0], [0, -1], [0, 1]], atol=1e-12)
        np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0)


if __name__ == '__main__':
    unittest.main()
