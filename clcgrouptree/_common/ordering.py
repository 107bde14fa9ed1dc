"""Sort order of sibling groups.

- special (non-default) groups like 'Archive' or 'Templates' always come first
- otherwise, groups are sorted in case-insensitive lexicographical order
- the group id breaks remaining ties, so the order is total
"""

from bisect import bisect_right
from typing import List, Tuple

from ..config import DEFAULT_GROUP_TYPE


GroupSortKey = Tuple[bool, str, str]


def group_sort_key(node, default_type: str = DEFAULT_GROUP_TYPE) -> GroupSortKey:
    """Sort key for any object with ``id``, ``name`` and ``type`` attributes."""
    return (node.type == default_type, node.name.upper(), node.id)


def group_less(a, b, default_type: str = DEFAULT_GROUP_TYPE) -> bool:
    """True if group ``a`` sorts before group ``b``."""
    return group_sort_key(a, default_type) < group_sort_key(b, default_type)


def insort_group(siblings: List, keys: List[GroupSortKey], node,
                 default_type: str = DEFAULT_GROUP_TYPE) -> int:
    """Insert ``node`` into the sorted ``siblings`` list.

    ``keys`` holds the sort keys of ``siblings`` in the same order and is
    updated alongside it.

    Returns:
        Index at which the node was inserted
    """
    key = group_sort_key(node, default_type)
    idx = bisect_right(keys, key)
    keys.insert(idx, key)
    siblings.insert(idx, node)
    return idx


def is_sorted_groups(siblings: List, default_type: str = DEFAULT_GROUP_TYPE) -> bool:
    keys = [group_sort_key(s, default_type) for s in siblings]
    return all(keys[i] <= keys[i + 1] for i in range(len(keys) - 1))
