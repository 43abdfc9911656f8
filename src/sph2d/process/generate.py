'''
Particle generators: regular lattice inside a shape, or reload from a
particle file written earlier.

Both return (positions, volumes) as numpy arrays of shape (n, 2) and (n,).
'''
import os

import numpy as np

from ..geometry import MultiPolygonShape


class ParticleGeneratorLattice:
    """Square lattice of spacing dp, cell centres kept when inside the shape."""

    def generate(self, shape: MultiPolygonShape, dp: float):
        if dp <= 0:
            raise ValueError(f"Particle spacing must be positive, got {dp}")
        lower, upper = shape.bounding_box()
        nx = int(np.ceil((upper[0] - lower[0]) / dp))
        ny = int(np.ceil((upper[1] - lower[1]) / dp))
        ix, iy = np.meshgrid(np.arange(nx), np.arange(ny), indexing="ij")
        points = np.column_stack([lower[0] + (ix.ravel() + 0.5) * dp,
                                  lower[1] + (iy.ravel() + 0.5) * dp])
        positions = points[shape.contains(points)]
        volumes = np.full(positions.shape[0], dp * dp)
        return positions, volumes


class ParticleGeneratorReload:
    """
    Particles read back from the last block of a particle file.

    The file uses the layout written by BodyStatesRecording:
        TIMESTEP  PARTICLES
        <time> <n>
        ID  GROUP  VOL  MASS  PX  PY  VX  VY  FX  FY  SIGMA
        <n rows>
    """

    def __init__(self, file_name: str):
        self.file_name = file_name

    def generate(self, shape: MultiPolygonShape = None, dp: float = None):
        if not os.path.exists(self.file_name):
            raise FileNotFoundError(f"Reload file not found: {self.file_name}")
        data = read_last_particle_block(self.file_name)
        if data.shape[0] == 0:
            raise ValueError(f"Reload file {self.file_name} holds no particles")
        return data[:, 4:6].copy(), data[:, 2].copy()


def read_particle_blocks(file_name: str):
    """All (time, rows) blocks of a particle file in order."""
    blocks = []
    with open(file_name, encoding="UTF-8") as fp:
        lines = fp.readlines()
    i = 0
    while i < len(lines):
        parts = lines[i].split()
        if len(parts) >= 2 and parts[0] == "TIMESTEP" and parts[1] == "PARTICLES":
            header = lines[i + 1].split()
            t, n = float(header[0]), int(header[1])
            rows = lines[i + 3:i + 3 + n]
            if len(rows) != n:
                raise ValueError(f"Truncated particle block at t={t} in {file_name}")
            data = np.array([[float(v) for v in row.split()] for row in rows]) if n > 0 \
                else np.empty((0, 11))
            blocks.append((t, data))
            i += 3 + n
        else:
            i += 1
    return blocks


def read_last_particle_block(file_name: str) -> np.ndarray:
    blocks = read_particle_blocks(file_name)
    if not blocks:
        raise ValueError(f"No particle block found in {file_name}")
    return blocks[-1][1]
