"""Asynchronous implementation of clc-group-tree.

The walk engine here runs its producer and callback workers as asyncio
tasks, so callbacks can do non-blocking I/O (e.g. query server details)
concurrently.
"""

from .walker import (
    AsyncGroupWalker,
    AsyncNodeCallback,
    walk_group_hierarchy,
)

__all__ = [
    'AsyncGroupWalker',
    'AsyncNodeCallback',
    'walk_group_hierarchy',
]
