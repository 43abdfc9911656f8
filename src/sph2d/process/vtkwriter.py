"""
VTK writer for particle bodies

Writes one legacy ASCII POLYDATA file per body and snapshot, readable by
Paraview, with the particle positions as vertices and per-particle fields
as point data.
"""

import os
from typing import Optional

import numpy as np
import taichi as ti


class VtkParticleWriter2D:
    """
    Writer class for exporting 2D particle fields to VTK format

    Fields are collected with add_scalar_field() / add_vector_field() and
    written together by write().
    """

    def __init__(self, output_dir: str, prefix: str, sub_dir: str = "vtk"):
        self.prefix = prefix
        self.output_path = os.path.join(output_dir, sub_dir)
        os.makedirs(self.output_path, exist_ok=True)
        self.fields = {}  # store multiple fields before writing

    def add_scalar_field(self, data: ti.ScalarField, field_name: str) -> None:
        self.fields[field_name] = ('scalar', data.to_numpy())

    def add_vector_field(self, data: ti.MatrixField, field_name: str) -> None:
        self.fields[field_name] = ('vector', data.to_numpy())

    def write(self, positions: ti.MatrixField, time_step: int, t: Optional[float] = None) -> str:
        """
        Write the collected fields at the given particle positions

        Args:
            positions: Particle position field, shape (n,) of 2D vectors
            time_step: Sub-step index used in the file name
            t: Simulated time written to the header

        Returns:
            Path of the written file.
        """
        points = positions.to_numpy()
        n = points.shape[0]
        file_path = os.path.join(self.output_path, f"{self.prefix}_{time_step:08d}.vtk")
        with open(file_path, 'w', encoding="UTF-8") as f:
            f.write("# vtk DataFile Version 3.0\n")
            f.write(f"{self.prefix} at step {time_step}" + (f" time {t:.9e}\n" if t is not None else "\n"))
            f.write("ASCII\n")
            f.write("DATASET POLYDATA\n")
            f.write(f"POINTS {n} double\n")
            np.savetxt(f, np.column_stack([points, np.zeros(n)]), fmt="%.9e")
            f.write(f"VERTICES {n} {2 * n}\n")
            np.savetxt(f, np.column_stack([np.ones(n, dtype=int), np.arange(n)]), fmt="%d")
            f.write(f"POINT_DATA {n}\n")
            for field_name, (field_type, data) in self.fields.items():
                if field_type == 'scalar':
                    f.write(f"SCALARS {field_name} double 1\n")
                    f.write("LOOKUP_TABLE default\n")
                    np.savetxt(f, data.reshape(n, 1), fmt="%.9e")
                else:
                    # VTK expects 3D vectors, so add zero z-component
                    f.write(f"VECTORS {field_name} double\n")
                    np.savetxt(f, np.column_stack([data.reshape(n, 2), np.zeros(n)]), fmt="%.9e")
        return file_path

    def clear_fields(self) -> None:
        self.fields = {}
