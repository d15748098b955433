"""Configuration system for DazzleTreeView.

This module defines how callers describe the tree they want flattened:
the root node, how to read identities and children from it, the
caller-owned expansion state, search and sort settings, and the callbacks
bound into every emitted node.
"""

import dataclasses
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .core.accessor import (
    NodeAccessor,
    FieldAccessor,
    CallableAccessor,
    FlatTreeAccessor,
)
from .core.cache import CacheValidation
from .core.matcher import SearchMatcher, NameSubstringMatcher, CallableMatcher
from .core.navigation import DEFAULT_NEXT_KEYS, DEFAULT_PREVIOUS_KEYS
from .errors import ConfigurationError


@dataclass
class TreeViewConfig:
    """Complete configuration for one tree view.

    Omitting ``expanded_state`` entirely (leaving it as None) switches the
    engine to static always-expanded mode. An empty mapping is not the same
    thing: it means "nothing is expanded".
    """

    # Source of truth
    data: Any = None

    # Accessors (None = read 'id' / 'children' fields)
    get_id: Optional[Callable[[Any], Any]] = None
    get_children: Optional[Callable[[Any], Any]] = None
    accessor: Optional[NodeAccessor] = None

    # Caller-owned state and its change handlers
    expanded_state: Optional[Mapping[Any, bool]] = None
    on_expanded_state_change: Optional[Callable[[dict], None]] = None
    on_selection: Optional[Callable[[Any], None]] = None

    # Presentation
    show_root: bool = True
    search_term: Optional[str] = ""
    search_match: Optional[Callable[[Any, str], bool]] = None
    child_sort: Optional[Callable[[Any, Any], int]] = None

    # Children cache tuning
    cache_validation: CacheValidation = CacheValidation.REFERENCE
    cache_max_entries: int = 100_000

    # Keyboard navigation keymap
    next_keys: Tuple[str, ...] = DEFAULT_NEXT_KEYS
    previous_keys: Tuple[str, ...] = DEFAULT_PREVIOUS_KEYS

    @property
    def is_static(self) -> bool:
        """True when no expansion state was supplied at all."""
        return self.expanded_state is None

    # Convenience constructors

    @classmethod
    def static(cls, data: Any, **kwargs) -> 'TreeViewConfig':
        """Create a config that shows every node (always expanded).

        Args:
            data: Root node
            **kwargs: Any other TreeViewConfig field

        Returns:
            TreeViewConfig in static always-expanded mode
        """
        if 'expanded_state' in kwargs:
            raise ConfigurationError("static() configs cannot carry an expanded_state")
        return cls(data=data, **kwargs)

    @classmethod
    def for_flat_tree(cls,
                      nodes: Mapping[Any, Any],
                      root_id: Any,
                      children_field: str = 'children',
                      id_field: str = 'id',
                      **kwargs) -> 'TreeViewConfig':
        """Create a config for an id-indexed table of nodes.

        Each node in ``nodes`` lists the ids of its children under
        ``children_field``; the accessor resolves them through the table.

        Args:
            nodes: Mapping of id -> node
            root_id: Id of the root node in ``nodes``
            children_field: Field holding the list of child ids
            id_field: Field holding the node's own id
            **kwargs: Any other TreeViewConfig field

        Returns:
            TreeViewConfig wired with a FlatTreeAccessor

        Raises:
            ConfigurationError: If root_id is not present in nodes
        """
        if root_id not in nodes:
            raise ConfigurationError(f"root_id {root_id!r} is not present in nodes")
        return cls(
            data=nodes[root_id],
            accessor=FlatTreeAccessor(nodes, children_field=children_field, id_field=id_field),
            **kwargs
        )

    def replace(self, **changes) -> 'TreeViewConfig':
        """Return a copy of this config with some options changed.

        Raises:
            ConfigurationError: If an option name is not recognised
        """
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ConfigurationError(f"Unknown tree view option(s): {', '.join(unknown)}")
        return dataclasses.replace(self, **changes)

    def resolve_accessor(self) -> NodeAccessor:
        """Build the accessor the engine should use.

        ``get_id`` / ``get_children`` override the matching half of
        ``accessor`` (or of the default field accessor).
        """
        base = self.accessor if self.accessor is not None else FieldAccessor()
        if self.get_id is None and self.get_children is None:
            return base
        return CallableAccessor(
            get_id=self.get_id or base.get_id,
            get_children=self.get_children or base.get_children,
        )

    def resolve_matcher(self) -> SearchMatcher:
        """Build the search matcher (default: substring of 'name')."""
        if self.search_match is None:
            return NameSubstringMatcher()
        return CallableMatcher(self.search_match)

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if self.data is None:
            errors.append("data (the root node) is required")

        for name in ('get_id', 'get_children', 'on_expanded_state_change',
                     'on_selection', 'search_match', 'child_sort'):
            value = getattr(self, name)
            if value is not None and not callable(value):
                errors.append(f"{name} must be callable, got {type(value).__name__}")

        if self.accessor is not None and not isinstance(self.accessor, NodeAccessor):
            errors.append("accessor must be a NodeAccessor instance")

        if self.expanded_state is not None and not isinstance(self.expanded_state, Mapping):
            errors.append(
                f"expanded_state must be a mapping of id -> bool, "
                f"got {type(self.expanded_state).__name__}"
            )

        if self.search_term is not None and not isinstance(self.search_term, str):
            errors.append(f"search_term must be a string, got {type(self.search_term).__name__}")

        if not isinstance(self.cache_validation, CacheValidation):
            errors.append("cache_validation must be a CacheValidation member")

        if not isinstance(self.cache_max_entries, int) or self.cache_max_entries <= 0:
            errors.append("cache_max_entries must be a positive integer")

        if not self.next_keys:
            errors.append("next_keys cannot be empty")
        if not self.previous_keys:
            errors.append("previous_keys cannot be empty")

        return errors
