'''
A rigid square shell box pulled against an elastic wall.

The box is a single particle layer sliding along x under a constant
acceleration of -150; the wall is a linear elastic frame held at its right
strip. Contact is computed in both directions, with the shell formulation
used for the wall particles.
'''
import argparse
import os
import sys

# Add the source directory to Python path
sys.path.append(os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__))))), "src"))

# Taichi packages (set backend, default precision and device memory)
import taichi as ti
ti.init(arch=ti.cpu, default_fp=ti.f64)

# Source packages
from sph2d.body import BodyRole, SolidBody, BodyRegionByParticle, SolidBodyPartForRigid
from sph2d.geometry import MultiPolygon, MultiPolygonShape, ShapeBooleanOps
from sph2d.process import (BodyStatesRecording, ParticleGeneratorLattice, ParticleGeneratorReload,
                           write_reload_file)
from sph2d.rigidbody import RigidBodySubsystem, SliderMobility
from sph2d.sphconfig import DomainBounds, LinearElasticSolid, NeoHookeanSolid, RunModeFlags, SPHSolverConfig
from sph2d.sphsolver import SPHSolver

# =====================================
# Simulation Constants
# =====================================
DL = 4.0                    # box length
DH = 4.0                    # box height
resolution_ref = 0.025      # reference particle spacing
BW = resolution_ref * 4.0   # wall width
ball_center = (0.25, 2.0)
ball_radius = 0.5           # half size of the shell box

rho0_s = 1.0
youngs_modulus = 5e4
poisson = 0.45
physical_viscosity = 200.0
rigid_gravity = (-150.0, 0.0)

T0 = 10.0
end_time = T0
output_interval = 0.01 * T0

output_dir = "output"
reload_dir = os.path.join(output_dir, "reload")


def wall_shape() -> MultiPolygonShape:
    multi_polygon = MultiPolygon()
    multi_polygon.add_a_box((-BW, -BW), (DL + BW, DH + BW), ShapeBooleanOps.add)
    multi_polygon.add_a_box((0.0, 0.0), (DL, DH), ShapeBooleanOps.sub)
    return MultiPolygonShape(multi_polygon, "Wall")


def ball_shape() -> MultiPolygonShape:
    cx, cy = ball_center
    multi_polygon = MultiPolygon()
    multi_polygon.add_a_box((cx - resolution_ref, cy - resolution_ref),
                            (cx + ball_radius + resolution_ref, cy + ball_radius + resolution_ref),
                            ShapeBooleanOps.add)
    multi_polygon.add_a_box((cx, cy), (cx + ball_radius, cy + ball_radius), ShapeBooleanOps.sub)
    return MultiPolygonShape(multi_polygon, "FreeBall")


def holder_shape() -> MultiPolygonShape:
    multi_polygon = MultiPolygon()
    multi_polygon.add_a_box((DL, -BW), (DL + BW, DH + BW), ShapeBooleanOps.add)
    return MultiPolygonShape(multi_polygon, "Holder")


def parse_run_mode() -> RunModeFlags:
    parser = argparse.ArgumentParser(description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--relax", action="store_true",
                        help="only generate the particle distribution and write it for reload")
    parser.add_argument("--reload", action="store_true",
                        help="start from a previously written particle distribution")
    parser.add_argument("--restart-step", type=int, default=0,
                        help="restart step, only 0 (initial condition) is supported")
    args = parser.parse_args()
    return RunModeFlags(run_particle_relaxation=args.relax,
                        reload_particles=args.reload,
                        restart_step=args.restart_step)


def generator_for(body_name: str, run_mode: RunModeFlags):
    if not run_mode.run_particle_relaxation and run_mode.reload_particles:
        return ParticleGeneratorReload(os.path.join(reload_dir, f"{body_name}_rld.p4p"))
    return ParticleGeneratorLattice()


def main():
    run_mode = parse_run_mode()

    domain = DomainBounds(-BW, DL + BW, -BW, DH + BW)
    config = SPHSolverConfig(domain, resolution_ref, end_time, output_interval, run_mode=run_mode)
    config.set_damping_properties(random_ratio=0.5, physical_viscosity=physical_viscosity)
    config.set_numerical_parameters(output_dir=output_dir)

    free_ball = SolidBody("FreeBall", ball_shape(), NeoHookeanSolid(rho0_s, youngs_modulus, poisson),
                          generator_for("FreeBall", run_mode), config, role=BodyRole.SHELL)
    wall = SolidBody("Wall", wall_shape(), LinearElasticSolid(rho0_s, youngs_modulus, poisson),
                     generator_for("Wall", run_mode), config)

    if run_mode.run_particle_relaxation:
        write_reload_file(free_ball, os.path.join(reload_dir, "FreeBall_rld.p4p"))
        write_reload_file(wall, os.path.join(reload_dir, "Wall_rld.p4p"))
        return

    ball_part = SolidBodyPartForRigid(free_ball, "FreeBall", ball_shape())
    holder = BodyRegionByParticle(wall, "Holder", holder_shape())

    rigid = RigidBodySubsystem(gravity=rigid_gravity, accuracy=config.rigid_accuracy)
    ball_index = rigid.add_body(ball_part, SliderMobility(axis=(1.0, 0.0)))
    rigid.realize_topology()

    recorder = BodyStatesRecording(output_dir, [free_ball, wall], rigid, rigid_body_count=1, write_vtk=True)
    solver = SPHSolver(config, wall, free_ball, holder, ball_part, rigid,
                       rigid_body=ball_index, recorder=recorder)
    solver.run()


if __name__ == '__main__':
    main()
