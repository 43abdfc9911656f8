"""
sph2d: total Lagrangian SPH elastic solids in contact with rigid bodies.

Subpackages:

- sphconfig:      domain, material and solver configuration
- dateclass:      Taichi particle and neighbor records
- geometry:       boolean polygon shapes
- bpcd:           cell linked lists for neighbor search
- body:           solid bodies and particle regions
- contactmanager: contact topology, density and force
- sphsolver:      stress relaxation, damping, time step and the main loop
- rigidbody:      rigid-body subsystem and the particle coupling bridge
- process:        particle generation and state recording
"""

__version__ = "0.1.0"
