"""
Elastic solid dynamics and the coupled time stepping loop.
"""

from .clock import SimulationClock
from .inner import InnerRelation
from .correction import CorrectConfiguration
from .stressrelaxation import StressRelaxationFirstHalf, StressRelaxationSecondHalf
from .constraint import ConstrainSolidBodyRegion
from .graph_coloring import canonicalize_pairs, color_pairs, validate_pair_coloring, convert_to_color_groups
from .damping import PairwiseDamping
from .timestep import AcousticTimeStepSize
from .sphsolver import SolverState, SPHSolver

__all__ = [
    "SimulationClock",
    "InnerRelation",
    "CorrectConfiguration",
    "StressRelaxationFirstHalf",
    "StressRelaxationSecondHalf",
    "ConstrainSolidBodyRegion",
    "canonicalize_pairs",
    "color_pairs",
    "validate_pair_coloring",
    "convert_to_color_groups",
    "PairwiseDamping",
    "AcousticTimeStepSize",
    "SolverState",
    "SPHSolver",
]
