"""
Solid-solid contact between two particle bodies.

- ContactRelation: neighbor lists of one body's particles in another body
- ContactDensitySummation / ShellContactDensity: compression measure per particle
- ContactForce: repulsive force from the contact densities of both sides
"""

from .contactrelation import ContactRelation
from .contactmodel import ContactDensity, contact_density_for
from .volumetric import ContactDensitySummation
from .shell import ShellContactDensity
from .contactforce import ContactForce

__all__ = [
    "ContactRelation",
    "ContactDensity",
    "contact_density_for",
    "ContactDensitySummation",
    "ShellContactDensity",
    "ContactForce",
]
