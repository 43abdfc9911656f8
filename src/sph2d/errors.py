"""
Exception types raised by the coupled solver.

Local numerical guards (minimum separations, singular correction matrices)
never raise. Everything below terminates a run.
"""


class SPHError(Exception):
    """Base class for solver failures."""


class NumericalInstabilityError(SPHError):
    """The time step left the acoustic bound or the particle state is no longer finite."""


class RigidIntegratorError(SPHError):
    """The rigid-body integrator could not meet its accuracy for the requested step."""


class RigidSubsystemStateError(SPHError):
    """A rigid subsystem operation was called in the wrong lifecycle state."""


class NeighborOverflowError(SPHError):
    """A particle found more neighbors than the configured capacity."""
