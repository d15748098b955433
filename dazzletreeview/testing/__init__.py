"""Testing utilities for DazzleTreeView consumers."""

from .fixtures import create_name_tree, create_flat_tree, CallCounter

__all__ = ['create_name_tree', 'create_flat_tree', 'CallCounter']
