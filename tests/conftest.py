"""Shared pytest configuration and fixtures for DazzleTreeView tests."""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: large generated trees (deselect with -m 'not slow')")


def make_tree():
    """Three-level sample tree.

    root
    ├── folder
    └── folder2
        └── nestedItem
    """
    return {
        'id': 'root',
        'name': 'Root',
        'children': [
            {'id': 'folder', 'name': 'Folder'},
            {
                'id': 'folder2',
                'name': 'Folder Two',
                'children': [
                    {'id': 'nestedItem', 'name': 'Nested Item'},
                ],
            },
        ],
    }


@pytest.fixture
def tree_data():
    """Fresh copy of the sample tree for each test."""
    return make_tree()


@pytest.fixture
def custom_tree_data():
    """The sample tree as an id-indexed table with unusual field names."""
    return {
        'root': {'qx': 'root', 'label': 'Root', 'childrenQx': ['folder', 'folder2']},
        'folder': {'qx': 'folder', 'label': 'Folder'},
        'folder2': {'qx': 'folder2', 'label': 'Folder Two', 'childrenQx': ['nestedItem']},
        'nestedItem': {'qx': 'nestedItem', 'label': 'Nested Item'},
    }


def ids(rows):
    """Ids of a visible list, in order."""
    return [row.id for row in rows]


def shape(rows):
    """Comparable positional summary of a visible list."""
    return [(row.id, row.level, row.parent_id, row.has_children, row.is_expanded) for row in rows]
