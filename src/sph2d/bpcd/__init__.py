"""
Module responsible for neighbor particle search in 2D SPH simulations.

Provides a bounded cell linked list (CellLinkedList) with a counting sort over
cells, used to build inner and contact neighbor lists.
"""

# Base classes
from .celllist import CellLinkedList
from .utils import *


__all__ = [
    "CellLinkedList",
    "cell_grid_size",
]
