'''
Snapshot output of particle bodies and rigid bodies.

Each body gets one <name>.p4p file to which a block is appended per
snapshot; rigid bodies go to rigid_bodies.dat, one line per body and snapshot.
Optionally every snapshot is also written as VTK point data under vtk/.
'''
import os
import time
from typing import List

import numpy as np

from ..body import SolidBody
from ..rigidbody import RigidBodyEngine
from .vtkwriter import VtkParticleWriter2D

P4P_HEADER = "ID  GROUP  VOL  MASS  PX  PY  VX  VY  FX  FY  SIGMA\n"
P4P_FORMAT = "%d %d %.9e %.9e %.9e %.9e %.9e %.9e %.9e %.9e %.9e"


def write_particle_block(fp, body: SolidBody, group: int, t: float):
    n = body.particle_count
    fp.write("TIMESTEP  PARTICLES\n")
    fp.write(f"{t} {n}\n")
    fp.write(P4P_HEADER)
    position = body.pf.pos.to_numpy()
    velocity = body.pf.vel.to_numpy()
    force = body.pf.contact_force.to_numpy()
    data = np.column_stack([
        body.pf.ID.to_numpy(), np.full(n, group),
        body.pf.vol0.to_numpy(), body.pf.mass.to_numpy(),
        position[:, 0], position[:, 1],
        velocity[:, 0], velocity[:, 1],
        force[:, 0], force[:, 1],
        body.pf.contact_density.to_numpy(),
    ])
    np.savetxt(fp, data, fmt=P4P_FORMAT)


def write_reload_file(body: SolidBody, file_name: str):
    """Write the current particle distribution of a body for a later reload."""
    folder = os.path.dirname(file_name)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(file_name, "w", encoding="UTF-8") as fp:
        write_particle_block(fp, body, 0, 0.0)
    print(f"Particle distribution of {body.name} written to {file_name}")


class BodyStatesRecording:

    def __init__(self, output_dir: str, bodies: List[SolidBody], engine: RigidBodyEngine = None,
                 rigid_body_count: int = 0, write_vtk: bool = False):
        self.output_dir = output_dir
        self.bodies = bodies
        self.vtk_writers = [VtkParticleWriter2D(output_dir, body.name) for body in bodies] if write_vtk else []
        self.engine = engine
        self.rigid_body_count = rigid_body_count if engine is not None else 0
        os.makedirs(output_dir, exist_ok=True)
        # Start every run with fresh files
        for body in bodies:
            open(self.body_file(body), "w", encoding="UTF-8").close()
        if self.rigid_body_count > 0:
            with open(self.rigid_file(), "w", encoding="UTF-8") as fp:
                fp.write("STEP  TIME  BODY  X  Y  ANGLE  VX  VY  OMEGA\n")

    def body_file(self, body: SolidBody) -> str:
        return os.path.join(self.output_dir, f"{body.name}.p4p")

    def rigid_file(self) -> str:
        return os.path.join(self.output_dir, "rigid_bodies.dat")

    def write_to_file(self, step: int, t: float):
        tk1 = time.time()
        for group, body in enumerate(self.bodies):
            with open(self.body_file(body), "a", encoding="UTF-8") as fp:
                write_particle_block(fp, body, group, t)
        for body, writer in zip(self.bodies, self.vtk_writers):
            writer.add_vector_field(body.pf.vel, "Velocity")
            writer.add_vector_field(body.pf.contact_force, "ContactForce")
            writer.add_vector_field(body.pf.n, "NormalDirection")
            writer.add_scalar_field(body.pf.contact_density, "ContactDensity")
            writer.write(body.pf.pos, step, t)
        if self.rigid_body_count > 0:
            with open(self.rigid_file(), "a", encoding="UTF-8") as fp:
                for b in range(self.rigid_body_count):
                    x, angle = self.engine.current_transform(b)
                    v, omega = self.engine.current_velocity(b)
                    fp.write(f"{step} {t:.9e} {b} {x[0]:.9e} {x[1]:.9e} {angle:.9e} "
                             f"{v[0]:.9e} {v[1]:.9e} {omega:.9e}\n")
        tk2 = time.time()
        print(f"save time cost = {tk2 - tk1:.3f}s")
        return tk2 - tk1
