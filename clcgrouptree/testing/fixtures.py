"""Test fixtures for clc-group-tree consumers.

These helpers build GroupNode trees from compact literals and reduce
reassembled trees to plain structures that are easy to compare in
assertions, without depending on walker internals.
"""

import random
from typing import Any, Dict, List, Optional, Set, Tuple, Union

from .._common.node import GroupNode, ReassembledNode
from .._common.traversal import iter_group_tree
from ..config import DEFAULT_GROUP_TYPE


def make_group_tree(layout: Dict[str, Any]) -> GroupNode:
    """Build a GroupNode tree from a nested dict.

    Keys: ``id`` (required), ``name`` (defaults to the id), ``type``,
    ``servers`` and ``groups`` (list of nested layouts).

    Example:
        >>> root = make_group_tree({
        ...     'id': 'R',
        ...     'groups': [{'id': 'A', 'name': 'zeta'},
        ...                {'id': 'B', 'name': 'alpha', 'type': 'archive'}],
        ... })
    """
    return GroupNode(
        id=layout['id'],
        name=layout.get('name', layout['id']),
        type=layout.get('type', DEFAULT_GROUP_TYPE),
        children=[make_group_tree(g) for g in layout.get('groups', [])],
        server_refs=layout.get('servers', []),
    )


def build_random_tree(
    count: int,
    seed: Optional[int] = None,
    special_ratio: float = 0.2,
    max_servers: int = 3
) -> GroupNode:
    """Build a tree of ``count`` groups with random shape, names and types.

    Each new group is attached below a randomly chosen existing group.
    Names deliberately mix upper and lower case.

    Args:
        count: Number of groups including the root
        seed: Seed for reproducible trees
        special_ratio: Share of groups that get a non-default type
        max_servers: Upper bound of servers per group
    """
    rng = random.Random(seed)
    layouts: List[Dict[str, Any]] = [{'id': 'g0000', 'name': 'Root', 'groups': []}]

    for i in range(1, count):
        word = ''.join(rng.choice('abcdefghij') for _ in range(5))
        if rng.random() < 0.5:
            word = word.capitalize()
        layout = {
            'id': f'g{i:04d}',
            'name': word,
            'type': rng.choice(['archive', 'templates']) if rng.random() < special_ratio
                    else DEFAULT_GROUP_TYPE,
            'servers': [f'srv-{i:04d}-{j}' for j in range(rng.randint(0, max_servers))],
            'groups': [],
        }
        rng.choice(layouts)['groups'].append(layout)
        layouts.append(layout)

    return make_group_tree(layouts[0])


Shape = Tuple[str, Tuple[str, ...], Tuple[Any, ...]]


def tree_shape(node: Union[ReassembledNode, GroupNode]) -> Shape:
    """Reduce a tree to nested tuples of (id, servers, children).

    Works on both input and output trees, so that two walks - or a walk
    and its input - can be compared with ``==``. Child order is kept.
    """
    if isinstance(node, GroupNode):
        return (node.id, tuple(node.server_refs), tuple(tree_shape(c) for c in node.children))
    return (node.id, tuple(node.servers), tuple(tree_shape(c) for c in node.groups))


def collect_ids(node: Union[ReassembledNode, GroupNode]) -> Set[str]:
    """Set of all group ids in the tree."""
    if isinstance(node, GroupNode):
        return {g.id for g, _ in iter_group_tree(node)}
    return {n.id for n in node.walk()}


def server_map(node: Union[ReassembledNode, GroupNode]) -> Dict[str, Set[str]]:
    """Map of group id -> set of directly contained servers."""
    if isinstance(node, GroupNode):
        return {g.id: set(g.server_refs) for g, _ in iter_group_tree(node)}
    return {n.id: set(n.servers) for n in node.walk()}


def parent_map(node: Union[ReassembledNode, GroupNode]) -> Dict[str, str]:
    """Map of group id -> parent id ('' for the root)."""
    if isinstance(node, GroupNode):
        return {g.id: (p.id if p is not None else '') for g, p in iter_group_tree(node)}
    result = {node.id: ''}
    for n in node.walk():
        for child in n.groups:
            result[child.id] = n.id
    return result
