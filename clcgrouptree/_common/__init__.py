"""Common components shared between sync and aio implementations.

This internal package contains non-I/O code that is identical between
both walker flavours. It should NOT be imported directly by users.

Components here include:
- Tree node types (GroupNode, NodeProjection, ReassembledNode)
- Sibling ordering and tree reassembly
- Sequential traversal and lookup helpers
- Text rendering

Important: This package must NEVER import from sync or aio to avoid
circular dependencies.
"""

from .node import (
    GroupNode,
    NodeProjection,
    ReassembledNode,
    load_group_tree,
)
from .ordering import (
    group_sort_key,
    group_less,
    insort_group,
    is_sorted_groups,
)
from .assembly import TreeAssembler, assemble_tree
from .traversal import (
    iter_group_tree,
    iter_projections,
    walk_group_tree,
    find_group_node,
    find_groups,
    find_group,
    find_group_by_name,
    find_group_by_id,
    count_groups,
)
from .render import format_group_structure, print_group_structure

__all__ = [
    'GroupNode',
    'NodeProjection',
    'ReassembledNode',
    'load_group_tree',
    'group_sort_key',
    'group_less',
    'insort_group',
    'is_sorted_groups',
    'TreeAssembler',
    'assemble_tree',
    'iter_group_tree',
    'iter_projections',
    'walk_group_tree',
    'find_group_node',
    'find_groups',
    'find_group',
    'find_group_by_name',
    'find_group_by_id',
    'count_groups',
    'format_group_structure',
    'print_group_structure',
]
