"""
Exception hierarchy for clc-group-tree.

Every error raised by the library itself derives from GroupTreeError.
Callback failures are the exception the caller's callback raised and are
re-raised unchanged, so they never share this hierarchy by accident.
"""

from typing import Optional


class GroupTreeError(Exception):
    """Base class for all library errors."""


class InvalidRootError(GroupTreeError, ValueError):
    """The walk was started without a usable root group."""


class ConsistencyError(GroupTreeError):
    """
    The processed node stream does not describe a single well-formed tree.

    This indicates that the source tree was inconsistent or was mutated
    while it was being walked.
    """


class MissingParentError(ConsistencyError):
    """A node references a parent id that was never seen."""

    def __init__(self, node_id: str, name: str, parent_id: str):
        super().__init__(f"no parent found for node {name}/{node_id} (parent {parent_id})")
        self.node_id = node_id
        self.name = name
        self.parent_id = parent_id


class RootCountError(ConsistencyError):
    """Zero or several nodes claim to be the root."""

    def __init__(self, root_ids):
        self.root_ids = list(root_ids)
        if not self.root_ids:
            message = "no root node found in group hierarchy"
        else:
            message = f"multiple root nodes found in group hierarchy: {', '.join(self.root_ids)}"
        super().__init__(message)


class DuplicateNodeError(ConsistencyError):
    """The same node id was delivered more than once."""

    def __init__(self, node_id: str):
        super().__init__(f"duplicate group id {node_id} in group hierarchy")
        self.node_id = node_id


class CycleError(ConsistencyError):
    """Some nodes are linked into a parent cycle and unreachable from the root."""

    def __init__(self, node_ids):
        self.node_ids = list(node_ids)
        super().__init__(
            f"groups unreachable from root (parent cycle): {', '.join(self.node_ids)}")


class IncompleteWalkError(ConsistencyError):
    """The number of reassembled nodes differs from the number produced."""

    def __init__(self, received: int, expected: Optional[int] = None):
        if expected is None:
            message = f"group stream ended after {received} groups before the walk finished"
        else:
            message = f"walk delivered {received} of {expected} groups"
        super().__init__(message)
        self.received = received
        self.expected = expected


class AmbiguousGroupError(GroupTreeError):
    """A single-result lookup matched more than one group."""

    def __init__(self, count: int, where: Optional[str] = None):
        location = f" in {where}" if where else ""
        super().__init__(f"ambiguous - {count} matching groups found{location}")
        self.count = count


class ContextCancelledError(GroupTreeError):
    """The walk context was cancelled before the walk could complete."""

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceededError(ContextCancelledError, TimeoutError):
    """The walk context reached its deadline."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)
