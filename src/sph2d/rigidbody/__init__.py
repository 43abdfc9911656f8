"""
Rigid body subsystem and its coupling to particle regions.
"""

from .engine import RigidBodyEngine
from .mobility import Mobility, SliderMobility, PinMobility, PlanarMobility
from .rigidbody import RigidBody, RigidBodyState
from .subsystem import RigidBodySubsystem, SubsystemState
from .bridge import TotalForceOnBodyPartForRigid, ConstrainBodyPartByRigid

__all__ = [
    "RigidBodyEngine",
    "Mobility",
    "SliderMobility",
    "PinMobility",
    "PlanarMobility",
    "RigidBody",
    "RigidBodyState",
    "RigidBodySubsystem",
    "SubsystemState",
    "TotalForceOnBodyPartForRigid",
    "ConstrainBodyPartByRigid",
]
