"""Synchronous implementation of clc-group-tree.

The walk engine here runs its producer and callback workers on a thread
pool; the calling thread blocks until the reassembled tree is ready.
"""

from .walker import (
    GroupWalker,
    NodeCallback,
    walk_group_hierarchy,
)

__all__ = [
    'GroupWalker',
    'NodeCallback',
    'walk_group_hierarchy',
]
