#!/usr/bin/env python3
"""
Display a hardware group hierarchy as a sorted tree.

This example demonstrates:
- Loading a group hierarchy saved from the groups API
- Enriching every group concurrently with an async callback
- Printing the reassembled, sorted tree

Usage:
    python show_group_tree.py [groups.json] [--group NAME] [--no-ids] [--timeout SECONDS]
"""

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from clcgrouptree import (
    Context,
    GroupTreeError,
    WalkConfig,
    find_group_by_name,
    load_group_tree,
    print_group_structure,
)
from clcgrouptree.aio import walk_group_hierarchy


async def query_server_state(ctx, node):
    """Pretend to look up each server, the way a real callback would call the API."""
    entries = []
    for server_id in node.servers:
        await asyncio.sleep(random.uniform(0.01, 0.05))  # Simulated request latency
        entries.append(f"{server_id:<50} 10.0.0.{random.randint(2, 250)}")
    node.servers = entries


async def main():
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument('path', nargs='?', default=Path(__file__).parent / 'groups_sample.json')
    parser.add_argument('--group', help="start at the group with this name")
    parser.add_argument('--no-ids', action='store_true', help="do not print group ids")
    parser.add_argument('--workers', type=int, default=20, help="concurrent callback workers")
    parser.add_argument('--timeout', type=float, help="give up after this many seconds")
    parser.add_argument('--debug', action='store_true', help="enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        root = load_group_tree(args.path)
        start = root
        if args.group:
            start = find_group_by_name(root, args.group)
            if start is None:
                print(f"ERROR: group {args.group!r} not found", file=sys.stderr)
                return 1

        with Context(timeout=args.timeout) as ctx:
            tree = await walk_group_hierarchy(
                start,
                query_server_state,
                context=ctx,
                config=WalkConfig(num_workers=args.workers),
            )
    except (GroupTreeError, OSError, ValueError) as e:
        print(f"ERROR: failed to process group hierarchy: {e}", file=sys.stderr)
        return 1

    print_group_structure(tree, show_ids=not args.no_ids)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
