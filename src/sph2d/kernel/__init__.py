"""
SPH smoothing kernels.
"""

from .wendland import WendlandC2Kernel

__all__ = [
    "WendlandC2Kernel",
]
