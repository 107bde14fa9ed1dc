"""Single-pass, sequential helpers over GroupNode trees.

These helpers walk the immutable input tree depth-first, parent before
children. They do no I/O and are shared by both walker flavours.
"""

from typing import Callable, Iterator, List, Optional, Tuple

from ..errors import AmbiguousGroupError
from .node import GroupNode, NodeProjection


GroupPredicate = Callable[[GroupNode], bool]


def iter_group_tree(root: GroupNode) -> Iterator[Tuple[GroupNode, Optional[GroupNode]]]:
    """Traverse the tree in pre-order.

    Uses an explicit stack, so arbitrarily deep trees do not hit the
    recursion limit.

    Yields:
        Tuples of (group, parent); the parent of ``root`` is None
    """
    stack: List[Tuple[GroupNode, Optional[GroupNode]]] = [(root, None)]
    while stack:
        group, parent = stack.pop()
        yield group, parent
        for child in reversed(group.children):
            stack.append((child, group))


def iter_projections(root: GroupNode) -> Iterator[NodeProjection]:
    """Flatten the tree into NodeProjections, in pre-order.

    The parent id of each projection comes from the walk itself, so the
    walk root always has an empty parent id, even if ``root`` is a
    sub-group of a larger hierarchy.
    """
    for group, parent in iter_group_tree(root):
        yield NodeProjection.from_group(group, parent.id if parent is not None else "")


def walk_group_tree(root: GroupNode, visitor: Callable[[GroupNode], None]) -> None:
    """Call ``visitor`` on every group, parent before children.

    The walk stops at the first exception raised by the visitor, which
    propagates to the caller.
    """
    for group, _ in iter_group_tree(root):
        visitor(group)


def find_group_node(root: GroupNode, found: GroupPredicate) -> Optional[GroupNode]:
    """Return the first group (in pre-order) for which ``found`` is true."""
    for group, _ in iter_group_tree(root):
        if found(group):
            return group
    return None


def find_groups(root: GroupNode, found: GroupPredicate) -> List[GroupNode]:
    """Return all groups for which ``found`` is true, in pre-order."""
    return [group for group, _ in iter_group_tree(root) if found(group)]


def find_group(root: GroupNode, found: GroupPredicate) -> Optional[GroupNode]:
    """Return the single group satisfying ``found``.

    Returns:
        The matching group, or None if nothing matches

    Raises:
        AmbiguousGroupError: if more than one group matches
    """
    groups = find_groups(root, found)
    if len(groups) > 1:
        raise AmbiguousGroupError(len(groups), root.location_id or None)
    return groups[0] if groups else None


def find_group_by_name(root: GroupNode, name: str) -> Optional[GroupNode]:
    return find_group(root, lambda g: g.name == name)


def find_group_by_id(root: GroupNode, group_id: str) -> Optional[GroupNode]:
    return find_group(root, lambda g: g.id == group_id)


def count_groups(root: GroupNode) -> int:
    return sum(1 for _ in iter_group_tree(root))
