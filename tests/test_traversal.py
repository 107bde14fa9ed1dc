"""Tests for the sequential traversal and lookup helpers."""

import pytest

from clcgrouptree import (
    AmbiguousGroupError,
    GroupNode,
    count_groups,
    find_group,
    find_group_by_id,
    find_group_by_name,
    find_group_node,
    find_groups,
    iter_group_tree,
    walk_group_tree,
)
from clcgrouptree._common.traversal import iter_projections
from clcgrouptree.testing import make_group_tree


def test_iter_group_tree_is_pre_order(simple_tree):
    order = [(g.id, p.id if p else None) for g, p in iter_group_tree(simple_tree)]

    assert order == [('R', None), ('A', 'R'), ('A1', 'A'), ('A2', 'A'), ('B', 'R')]


def test_iter_group_tree_handles_deep_trees():
    node = GroupNode('leaf', 'leaf')
    for i in range(5000):
        node = GroupNode(f'n{i}', f'n{i}', children=[node])

    assert count_groups(node) == 5001


def test_projections_take_parent_from_walk(simple_tree):
    projections = {p.id: p for p in iter_projections(simple_tree)}

    assert projections['R'].parent_id == ''
    assert projections['A1'].parent_id == 'A'
    assert projections['B'].servers == ['s1', 's2']


def test_projection_of_subtree_has_empty_root_parent(simple_tree):
    subtree = simple_tree.children[0]

    projections = list(iter_projections(subtree))

    assert projections[0].id == 'A'
    assert projections[0].parent_id == ''
    assert [p.parent_id for p in projections[1:]] == ['A', 'A']


def test_walk_group_tree_visits_parent_first(simple_tree):
    visited = []

    walk_group_tree(simple_tree, lambda g: visited.append(g.id))

    assert visited == ['R', 'A', 'A1', 'A2', 'B']


def test_walk_group_tree_handles_deep_trees():
    group = GroupNode('leaf', 'leaf')
    for i in range(5000):
        group = GroupNode(f'g{i}', f'g{i}', children=[group])
    visited = []

    walk_group_tree(group, lambda g: visited.append(g.id))

    assert len(visited) == 5001
    assert visited[0] == 'g4999'
    assert visited[-1] == 'leaf'


def test_walk_group_tree_stops_on_error(simple_tree):
    visited = []

    def visitor(group):
        visited.append(group.id)
        if group.id == 'A1':
            raise RuntimeError('stop here')

    with pytest.raises(RuntimeError, match='stop here'):
        walk_group_tree(simple_tree, visitor)

    assert visited == ['R', 'A', 'A1']


def test_find_group_node(simple_tree):
    assert find_group_node(simple_tree, lambda g: g.name == 'alpha').id == 'A2'
    assert find_group_node(simple_tree, lambda g: g.name == 'nope') is None


def test_find_groups(simple_tree):
    found = find_groups(simple_tree, lambda g: g.name == 'alpha')

    assert [g.id for g in found] == ['A2', 'B']


def test_find_group_rejects_ambiguous_matches(simple_tree):
    with pytest.raises(AmbiguousGroupError) as exc_info:
        find_group_by_name(simple_tree, 'alpha')

    assert exc_info.value.count == 2


def test_find_group_by_name_and_id(simple_tree):
    assert find_group_by_name(simple_tree, 'Bravo').id == 'A1'
    assert find_group_by_name(simple_tree, 'bravo') is None
    assert find_group_by_id(simple_tree, 'B').name == 'alpha'
    assert find_group(simple_tree, lambda g: False) is None


def test_ambiguity_message_mentions_location():
    root = GroupNode('r', 'root', location_id='WA1',
                     children=[GroupNode('a', 'x'), GroupNode('b', 'x')])

    with pytest.raises(AmbiguousGroupError, match='in WA1'):
        find_group_by_name(root, 'x')


def test_make_group_tree_defaults():
    root = make_group_tree({'id': 'R', 'groups': [{'id': 'C', 'servers': ['s']}]})

    assert root.name == 'R'
    assert root.type == 'default'
    assert root.children[0].server_refs == ('s',)
