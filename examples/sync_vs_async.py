#!/usr/bin/env python3
"""
Comparison of the thread-based and asyncio group walkers.

This example demonstrates:
- Both walkers produce the same sorted tree
- Callback latency is overlapped by the worker pool
- The effect of the worker count on wall time
"""

import asyncio
import sys
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from clcgrouptree import WalkConfig, count_groups
from clcgrouptree.aio import walk_group_hierarchy as walk_async
from clcgrouptree.sync import walk_group_hierarchy as walk_sync
from clcgrouptree.testing import build_random_tree, tree_shape

LATENCY = 0.01  # Simulated per-group API latency


def slow_callback(ctx, node):
    time.sleep(LATENCY)


async def slow_callback_async(ctx, node):
    await asyncio.sleep(LATENCY)


def main():
    root = build_random_tree(200, seed=7)
    groups = count_groups(root)

    print("clc-group-tree - Sync vs Async Walk Comparison")
    print("=" * 60)
    print(f"Groups: {groups}, simulated latency per group: {LATENCY * 1000:.0f}ms")
    print(f"Sequential lower bound: {groups * LATENCY:.2f} seconds")
    print("-" * 60)

    for workers in (1, 5, 20, 50):
        config = WalkConfig(num_workers=workers)

        start = time.perf_counter()
        sync_tree = walk_sync(root, slow_callback, config=config)
        sync_time = time.perf_counter() - start

        start = time.perf_counter()
        async_tree = asyncio.run(walk_async(root, slow_callback_async, config=config))
        async_time = time.perf_counter() - start

        same = tree_shape(sync_tree) == tree_shape(async_tree)
        print(f"{workers:>3} workers:  threads {sync_time:.3f}s   asyncio {async_time:.3f}s   "
              f"identical trees: {same}")


if __name__ == "__main__":
    main()
