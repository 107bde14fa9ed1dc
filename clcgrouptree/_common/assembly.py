"""Reassembly of the processed node stream into a sorted tree.

Nodes arrive in arbitrary order, so a child may be seen before its parent.
The assembler therefore collects every node into a table keyed by group id
first, and wires parents to children by id lookup in a second pass.
"""

import logging
from typing import Dict, Iterable, List, Optional

from ..config import DEFAULT_GROUP_TYPE
from ..errors import (
    CycleError,
    DuplicateNodeError,
    IncompleteWalkError,
    MissingParentError,
    RootCountError,
)
from .node import NodeProjection, ReassembledNode
from .ordering import GroupSortKey, insort_group

logger = logging.getLogger(__name__)


class TreeAssembler:
    """Builds a ReassembledNode tree from NodeProjections.

    An assembler is owned by a single consumer and is not thread-safe.
    It is used once per walk.

    Example:
        >>> assembler = TreeAssembler()
        >>> for projection in stream:
        ...     assembler.add(projection)
        >>> root = assembler.build()
    """

    def __init__(self, default_type: str = DEFAULT_GROUP_TYPE):
        self.default_type = default_type
        self._nodes: Dict[str, ReassembledNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def add(self, projection: NodeProjection) -> ReassembledNode:
        """Record one processed node.

        Raises:
            DuplicateNodeError: if the node id was already recorded
        """
        if projection.id in self._nodes:
            raise DuplicateNodeError(projection.id)
        node = ReassembledNode.from_projection(projection)
        self._nodes[node.id] = node
        return node

    def extend(self, projections: Iterable[NodeProjection]) -> None:
        for projection in projections:
            self.add(projection)

    def build(self, expected: Optional[int] = None) -> ReassembledNode:
        """Link all recorded nodes and return the root.

        Children are inserted into their parent's ``groups`` by binary
        search, so sibling lists come out sorted regardless of the order
        in which the nodes were added.

        Args:
            expected: Number of nodes the walk produced, if known

        Raises:
            IncompleteWalkError: if ``expected`` differs from the recorded count
            MissingParentError: if a node's parent was never recorded
            RootCountError: if there is not exactly one root
            CycleError: if some nodes cannot be reached from the root
        """
        if expected is not None and expected != len(self._nodes):
            logger.warning("Reassembly received %d of %d groups", len(self._nodes), expected)
            raise IncompleteWalkError(len(self._nodes), expected)

        roots: List[ReassembledNode] = []
        sibling_keys: Dict[str, List[GroupSortKey]] = {}

        for node in self._nodes.values():
            if not node.parent_id:
                roots.append(node)
                continue

            parent = self._nodes.get(node.parent_id)
            if parent is None:
                logger.warning("Group %s/%s references unknown parent %s",
                               node.name, node.id, node.parent_id)
                raise MissingParentError(node.id, node.name, node.parent_id)

            keys = sibling_keys.setdefault(parent.id, [])
            insort_group(parent.groups, keys, node, self.default_type)

        if len(roots) != 1:
            logger.warning("Group hierarchy has %d root nodes", len(roots))
            raise RootCountError(sorted(r.id for r in roots))

        # Every node has exactly one parent, so anything the root cannot
        # reach sits on a parent cycle
        root = roots[0]
        reached = {node.id for node in root.walk()}
        if len(reached) != len(self._nodes):
            unreachable = sorted(set(self._nodes) - reached)
            logger.warning("Group hierarchy has %d groups on a parent cycle", len(unreachable))
            raise CycleError(unreachable)

        logger.debug("Reassembled %d groups under root %s", len(self._nodes), root.id)
        return root

    def get(self, node_id: str) -> Optional[ReassembledNode]:
        return self._nodes.get(node_id)


def assemble_tree(projections: Iterable[NodeProjection],
                  default_type: str = DEFAULT_GROUP_TYPE) -> ReassembledNode:
    """Reassemble a complete projection stream in one call."""
    assembler = TreeAssembler(default_type)
    assembler.extend(projections)
    return assembler.build()
