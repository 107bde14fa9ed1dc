"""Group tree node types.

Three node types cover the life of one walk:

- GroupNode: the immutable input tree, as fetched from the API
- NodeProjection: a flat, mutable per-group record handed to callbacks
- ReassembledNode: the sorted output tree rebuilt from projections

The GroupNode is intentionally kept simple - it's a data container.
Walking, projecting and reassembling are done by the traversal and
assembly modules.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from ..config import DEFAULT_GROUP_TYPE


@dataclass(frozen=True)
class GroupNode:
    """Hardware group as delivered by the group hierarchy API.

    Each group owns its sub-groups exclusively, so a tree of GroupNodes is
    acyclic and single-rooted. Ids must be unique across the tree.
    """

    id: str
    name: str
    type: str = DEFAULT_GROUP_TYPE
    children: Tuple['GroupNode', ...] = ()
    server_refs: Tuple[str, ...] = ()

    # Descriptive fields, carried but never interpreted
    description: str = ""
    location_id: str = ""
    status: str = ""

    def __post_init__(self):
        # Accept any iterable, store immutable sequences without duplicates
        object.__setattr__(self, 'children', tuple(self.children))
        object.__setattr__(self, 'server_refs', tuple(dict.fromkeys(self.server_refs)))

    def is_leaf(self) -> bool:
        """True if this group has no sub-groups."""
        return not self.children

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> 'GroupNode':
        """Decode a group payload of the v2 groups API.

        Sub-groups are decoded recursively from ``groups``; servers are
        taken from the ``links`` entries whose ``rel`` is ``server``.

        Args:
            payload: Decoded JSON object of a single group

        Returns:
            GroupNode for the payload and all of its sub-groups
        """
        servers = [
            link['id'] for link in payload.get('links') or []
            if link.get('rel') == 'server' and link.get('id')
        ]
        return cls(
            id=payload['id'],
            name=payload.get('name', ''),
            type=payload.get('type') or DEFAULT_GROUP_TYPE,
            children=[cls.from_dict(g) for g in payload.get('groups') or []],
            server_refs=servers,
            description=payload.get('description', ''),
            location_id=payload.get('locationId', ''),
            status=payload.get('status', ''),
        )

    def __repr__(self) -> str:
        return (f"GroupNode(id={self.id!r}, name={self.name!r}, type={self.type!r}, "
                f"children={len(self.children)}, servers={len(self.server_refs)})")


def load_group_tree(path: Union[str, Path]) -> GroupNode:
    """Read a group hierarchy saved as JSON (e.g. a dump of the groups API)."""
    with open(path, 'r', encoding='utf-8') as fp:
        return GroupNode.from_dict(json.load(fp))


@dataclass
class NodeProjection:
    """Flat record of one group, produced during the walk.

    Callbacks may mutate any field in place - typically ``servers``
    (e.g. replacing ids with richer descriptions) or ``annotations``.
    The identity fields ``id`` and ``parent_id`` determine where the
    node ends up in the reassembled tree and should be left alone.
    """

    id: str
    name: str
    type: str
    parent_id: str = ""   # Empty for the root of the walk
    servers: List[str] = field(default_factory=list)
    annotations: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_group(cls, group: GroupNode, parent_id: str = "") -> 'NodeProjection':
        return cls(
            id=group.id,
            name=group.name,
            type=group.type,
            parent_id=parent_id,
            servers=list(group.server_refs),
        )

    def is_root(self) -> bool:
        return not self.parent_id


@dataclass(eq=False)
class ReassembledNode:
    """Node of the sorted output tree.

    ``groups`` is kept sorted by the group ordering rule while the tree is
    being reassembled; it is never appended to in arrival order.
    """

    id: str
    name: str
    type: str
    parent_id: str = ""
    servers: List[str] = field(default_factory=list)
    annotations: Dict[str, Any] = field(default_factory=dict)
    groups: List['ReassembledNode'] = field(default_factory=list)

    @classmethod
    def from_projection(cls, projection: NodeProjection) -> 'ReassembledNode':
        return cls(
            id=projection.id,
            name=projection.name,
            type=projection.type,
            parent_id=projection.parent_id,
            servers=list(projection.servers),
            annotations=dict(projection.annotations),
        )

    def is_special(self, default_type: str = DEFAULT_GROUP_TYPE) -> bool:
        """True for system folders such as Archive or Templates."""
        return self.type != default_type

    def walk(self) -> Iterator['ReassembledNode']:
        """Yield this node and all descendants in pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.groups))

    def find(self, node_id: str) -> Optional['ReassembledNode']:
        """Find the node with the given id in this subtree."""
        for node in self.walk():
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert the subtree into plain dicts and lists for export."""
        return {
            'id': self.id,
            'name': self.name,
            'type': self.type,
            'servers': list(self.servers),
            'annotations': dict(self.annotations),
            'groups': [g.to_dict() for g in self.groups],
        }

    def __repr__(self) -> str:
        return f"ReassembledNode(id={self.id!r}, name={self.name!r}, groups={len(self.groups)})"
