"""Testing utilities for clc-group-tree."""

from .fixtures import (
    make_group_tree,
    build_random_tree,
    tree_shape,
    collect_ids,
    server_map,
    parent_map,
)

__all__ = [
    'make_group_tree',
    'build_random_tree',
    'tree_shape',
    'collect_ids',
    'server_map',
    'parent_map',
]
