"""Indented text listing of a reassembled group tree."""

import sys
from typing import List, Optional, TextIO

from ..config import DEFAULT_GROUP_TYPE
from .node import ReassembledNode


INDENT = "    "
ID_COLUMN = 70


def format_group_structure(
    tree: ReassembledNode,
    show_ids: bool = True,
    default_type: str = DEFAULT_GROUP_TYPE,
    indent: str = ""
) -> List[str]:
    """Render the tree as lines of text.

    Each group is shown as ``name/``, special groups as ``[name]/`` so that
    they stand out. Servers are listed below their group, one level deeper.

    Args:
        tree: Root of the subtree to render
        show_ids: Append the group id in a right-hand column
        default_type: Group type of ordinary folders
        indent: Prefix for the first level

    Returns:
        List of lines without trailing newlines
    """
    lines: List[str] = []

    def render(node: ReassembledNode, prefix: str) -> None:
        if node.type != default_type:
            group_line = f"{prefix}[{node.name}]/"
        else:
            group_line = f"{prefix}{node.name}/"

        if show_ids:
            lines.append(f"{group_line:<{ID_COLUMN}} {node.id}")
        else:
            lines.append(group_line)

        for server in node.servers:
            lines.append(f"{prefix}{INDENT}{server}")

        for child in node.groups:
            render(child, prefix + INDENT)

    render(tree, indent)
    return lines


def print_group_structure(
    tree: ReassembledNode,
    show_ids: bool = True,
    default_type: str = DEFAULT_GROUP_TYPE,
    file: Optional[TextIO] = None
) -> None:
    """Print the tree listing produced by format_group_structure."""
    out = file if file is not None else sys.stdout
    for line in format_group_structure(tree, show_ids, default_type):
        print(line, file=out)
