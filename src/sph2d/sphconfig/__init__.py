"""
Core configuration and data types for SPH solid simulations.
"""

# Base classes
from .material_model import ElasticSolidConfig, LinearElasticSolid, NeoHookeanSolid
from .types import DomainBounds, DampingProperties, RunModeFlags
from .sphconfig import SPHSolverConfig

__all__ = [
    "ElasticSolidConfig",
    "LinearElasticSolid",
    "NeoHookeanSolid",
    "DomainBounds",
    "DampingProperties",
    "RunModeFlags",
    "SPHSolverConfig",
]
