"""clc-group-tree - hardware group hierarchy walking for the CLC v2 API.

Walks a nested hardware group tree, runs a callback on every group in
parallel, and reassembles the results into a sorted, display-ready tree.

Choose your implementation:
━━━━━━━━━━━━━━━━━━━━━━━━━━
Synchronous:
    from clcgrouptree.sync import walk_group_hierarchy

Asynchronous:
    from clcgrouptree.aio import walk_group_hierarchy
━━━━━━━━━━━━━━━━━━━━━━━━━━

Both implementations share the tree model, ordering and reassembly;
they differ only in how the callback workers are scheduled.
"""

import logging

__version__ = "0.1.0"

from ._common import (
    GroupNode,
    NodeProjection,
    ReassembledNode,
    load_group_tree,
    group_sort_key,
    iter_group_tree,
    walk_group_tree,
    find_group_node,
    find_groups,
    find_group,
    find_group_by_name,
    find_group_by_id,
    count_groups,
    format_group_structure,
    print_group_structure,
)
from .config import WalkConfig, DEFAULT_GROUP_TYPE, DEFAULT_NUM_WORKERS
from .context import Context
from .errors import (
    GroupTreeError,
    InvalidRootError,
    ConsistencyError,
    MissingParentError,
    RootCountError,
    DuplicateNodeError,
    CycleError,
    IncompleteWalkError,
    AmbiguousGroupError,
    ContextCancelledError,
    DeadlineExceededError,
)

# Re-export submodules for convenient access
from . import sync
from . import aio

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "sync",
    "aio",
    # Tree model
    "GroupNode",
    "NodeProjection",
    "ReassembledNode",
    "load_group_tree",
    # Helpers
    "group_sort_key",
    "iter_group_tree",
    "walk_group_tree",
    "find_group_node",
    "find_groups",
    "find_group",
    "find_group_by_name",
    "find_group_by_id",
    "count_groups",
    "format_group_structure",
    "print_group_structure",
    # Configuration
    "WalkConfig",
    "DEFAULT_GROUP_TYPE",
    "DEFAULT_NUM_WORKERS",
    "Context",
    # Errors
    "GroupTreeError",
    "InvalidRootError",
    "ConsistencyError",
    "MissingParentError",
    "RootCountError",
    "DuplicateNodeError",
    "CycleError",
    "IncompleteWalkError",
    "AmbiguousGroupError",
    "ContextCancelledError",
    "DeadlineExceededError",
]
