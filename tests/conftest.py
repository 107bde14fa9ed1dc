"""Shared fixtures for the clc-group-tree test suite."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from clcgrouptree.testing import make_group_tree, build_random_tree


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running test, skipped by run_tests.py")


@pytest.fixture
def simple_tree():
    """Create a simple test tree.

    Structure:
        root (R)
        ├── zeta (A, default)
        │   ├── Bravo (A1)      servers: s3
        │   └── alpha (A2)
        └── alpha [archive] (B)   servers: s1, s2
    """
    return make_group_tree({
        'id': 'R', 'name': 'root',
        'groups': [
            {'id': 'A', 'name': 'zeta', 'groups': [
                {'id': 'A1', 'name': 'Bravo', 'servers': ['s3']},
                {'id': 'A2', 'name': 'alpha'},
            ]},
            {'id': 'B', 'name': 'alpha', 'type': 'archive', 'servers': ['s1', 's2']},
        ],
    })


@pytest.fixture
def random_tree():
    """A 50-group tree with mixed types and names."""
    return build_random_tree(50, seed=42)


@pytest.fixture
def sample_json_path():
    return Path(__file__).parent.parent / 'examples' / 'groups_sample.json'
