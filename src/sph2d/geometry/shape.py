"""
2D shapes built from a boolean sequence of polygons.

Each polygon is either added to or subtracted from everything before it,
in insertion order. Containment uses matplotlib paths.
"""

from enum import Enum

import numpy as np
from matplotlib.path import Path


class ShapeBooleanOps(Enum):
    add = 0
    sub = 1


class MultiPolygon:
    """Ordered list of closed polygons with their boolean operation."""

    def __init__(self):
        self.polygons = []

    def add_a_polygon(self, points, op: ShapeBooleanOps = ShapeBooleanOps.add) -> 'MultiPolygon':
        vertices = np.asarray(points, dtype=float)
        if vertices.ndim != 2 or vertices.shape[1] != 2 or vertices.shape[0] < 3:
            raise ValueError("A polygon needs at least three 2D vertices")
        if not np.allclose(vertices[0], vertices[-1]):
            vertices = np.vstack([vertices, vertices[:1]])
        self.polygons.append((vertices, op))
        return self

    def add_a_box(self, lower, upper, op: ShapeBooleanOps = ShapeBooleanOps.add) -> 'MultiPolygon':
        (x0, y0), (x1, y1) = lower, upper
        return self.add_a_polygon([(x0, y0), (x0, y1), (x1, y1), (x1, y0), (x0, y0)], op)


class MultiPolygonShape:
    """Shape value of a body or a body region."""

    def __init__(self, multi_polygon: MultiPolygon, name: str = "MultiPolygonShape"):
        if not multi_polygon.polygons:
            raise ValueError("MultiPolygonShape needs at least one polygon")
        self.name = name
        self.multi_polygon = multi_polygon
        self._paths = [(Path(vertices), op) for vertices, op in multi_polygon.polygons]

    def contains(self, points) -> np.ndarray:
        """Boolean mask of the points lying inside the shape."""
        points = np.atleast_2d(np.asarray(points, dtype=float))
        inside = np.zeros(points.shape[0], dtype=bool)
        for path, op in self._paths:
            in_polygon = path.contains_points(points)
            if op == ShapeBooleanOps.add:
                inside |= in_polygon
            else:
                inside &= ~in_polygon
        return inside

    def bounding_box(self):
        added = [vertices for vertices, op in self.multi_polygon.polygons if op == ShapeBooleanOps.add]
        if not added:
            raise ValueError(f"Shape {self.name} has no added polygon")
        stacked = np.vstack(added)
        return stacked.min(axis=0), stacked.max(axis=0)

    def _segments(self):
        starts = []
        ends = []
        for vertices, _ in self.multi_polygon.polygons:
            starts.append(vertices[:-1])
            ends.append(vertices[1:])
        return np.vstack(starts), np.vstack(ends)

    def find_normal_direction(self, points) -> np.ndarray:
        """
        Outward unit normal of the closest boundary segment for every point.
        The sign is chosen so that a small step along the normal leaves the shape.
        """
        points = np.atleast_2d(np.asarray(points, dtype=float))
        a, b = self._segments()
        edge = b - a
        length2 = np.einsum("ij,ij->i", edge, edge)
        valid = length2 > 0.0
        a, b, edge, length2 = a[valid], b[valid], edge[valid], length2[valid]

        # (points, segments) projections
        ap = points[:, None, :] - a[None, :, :]
        t = np.clip(np.einsum("psk,sk->ps", ap, edge) / length2[None, :], 0.0, 1.0)
        closest = a[None, :, :] + t[..., None] * edge[None, :, :]
        dist2 = np.sum((points[:, None, :] - closest) ** 2, axis=2)
        nearest = np.argmin(dist2, axis=1)

        seg = edge[nearest]
        normals = np.column_stack([seg[:, 1], -seg[:, 0]]) / np.sqrt(length2[nearest])[:, None]
        foot = closest[np.arange(points.shape[0]), nearest]

        lower, upper = self.bounding_box()
        eps = 1e-6 * float(np.max(upper - lower))
        flip = self.contains(foot + eps * normals)
        normals[flip] *= -1.0
        return normals
