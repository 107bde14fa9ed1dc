"""Tests for the group tree node types."""

import json

import pytest

from clcgrouptree import GroupNode, NodeProjection, ReassembledNode, load_group_tree


def test_group_node_is_immutable():
    node = GroupNode('g1', 'web')

    with pytest.raises(AttributeError):
        node.name = 'db'


def test_group_node_normalizes_sequences():
    child = GroupNode('c', 'child')
    node = GroupNode('p', 'parent', children=[child], server_refs=['s1', 's2', 's1'])

    assert node.children == (child,)
    assert node.server_refs == ('s1', 's2')
    assert not node.is_leaf()
    assert child.is_leaf()


def test_from_dict_decodes_api_payload():
    payload = {
        'id': 'root-id',
        'name': 'WA1 Hardware',
        'locationId': 'WA1',
        'groups': [
            {
                'id': 'web-id',
                'name': 'web',
                'type': 'default',
                'links': [
                    {'rel': 'parentGroup', 'id': 'root-id'},
                    {'rel': 'server', 'id': 'WA1WEB01'},
                    {'rel': 'self', 'href': '/v2/groups/acct/web-id'},
                    {'rel': 'server', 'id': 'WA1WEB02'},
                ],
            },
            {'id': 'arch-id', 'name': 'Archive', 'type': 'archive'},
        ],
    }

    root = GroupNode.from_dict(payload)

    assert root.id == 'root-id'
    assert root.type == 'default'  # Missing type decodes as ordinary folder
    assert root.location_id == 'WA1'
    assert [c.id for c in root.children] == ['web-id', 'arch-id']
    assert root.children[0].server_refs == ('WA1WEB01', 'WA1WEB02')
    assert root.children[1].type == 'archive'
    assert root.children[1].server_refs == ()


def test_load_group_tree(sample_json_path):
    root = load_group_tree(sample_json_path)

    assert root.name == 'WA1 Hardware'
    assert len(root.children) == 4
    database = [c for c in root.children if c.name == 'Database'][0]
    assert database.server_refs == ('WA1ACCTDB01',)
    assert database.children[0].server_refs == ('WA1ACCTDB02',)


def test_load_group_tree_from_tmp_file(tmp_path):
    path = tmp_path / 'groups.json'
    path.write_text(json.dumps({'id': 'x', 'name': 'only'}))

    root = load_group_tree(path)

    assert root == GroupNode('x', 'only')


def test_projection_from_group():
    group = GroupNode('g1', 'web', server_refs=['s1', 's2'])

    projection = NodeProjection.from_group(group, parent_id='root')

    assert projection.id == 'g1'
    assert projection.parent_id == 'root'
    assert projection.servers == ['s1', 's2']
    assert not projection.is_root()
    assert NodeProjection.from_group(group).is_root()

    # Mutating the projection leaves the input untouched
    projection.servers.append('s3')
    assert group.server_refs == ('s1', 's2')


def test_reassembled_node_helpers():
    leaf = ReassembledNode('c', 'child', 'default', parent_id='p', servers=['s1'])
    special = ReassembledNode('a', 'Archive', 'archive', parent_id='p')
    root = ReassembledNode('p', 'parent', 'default', groups=[special, leaf])

    assert [n.id for n in root.walk()] == ['p', 'a', 'c']
    assert root.find('c') is leaf
    assert root.find('missing') is None
    assert special.is_special()
    assert not leaf.is_special()

    exported = root.to_dict()
    assert exported['id'] == 'p'
    assert [g['id'] for g in exported['groups']] == ['a', 'c']
    assert exported['groups'][1]['servers'] == ['s1']


def test_reassembled_node_copies_projection_data():
    projection = NodeProjection('g', 'name', 'default', servers=['s1'], annotations={'k': 1})

    node = ReassembledNode.from_projection(projection)
    projection.servers.append('s2')
    projection.annotations['k'] = 2

    assert node.servers == ['s1']
    assert node.annotations == {'k': 1}
