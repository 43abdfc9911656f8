"""
Particle generation, snapshot output and plotting.
"""

from .generate import ParticleGeneratorLattice, ParticleGeneratorReload, read_particle_blocks
from .output import BodyStatesRecording, write_reload_file
from .visual import plot_snapshots, rigid_body_history
from .vtkwriter import VtkParticleWriter2D

__all__ = [
    "ParticleGeneratorLattice",
    "ParticleGeneratorReload",
    "read_particle_blocks",
    "BodyStatesRecording",
    "write_reload_file",
    "plot_snapshots",
    "rigid_body_history",
    "VtkParticleWriter2D",
]
