"""Node decoration for DazzleTreeView.

Turns raw traversal entries into VisibleNode objects carrying positional
metadata and the ``select`` / ``toggle_expanded`` handles a UI binds to.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional

from .accessor import read_field
from .traverser import RawVisibleEntry
from ..errors import MissingCallbackError


logger = logging.getLogger(__name__)


class NodeDecorator:
    """Binds caller callbacks into the nodes of one flattening pass.

    The decorator keeps no selection state and never mutates the expansion
    map it was given; ``toggle_expanded`` hands the caller a complete new
    map instead.
    """

    def __init__(self,
                 expanded_state: Optional[Mapping[Any, bool]] = None,
                 on_expanded_state_change: Optional[Callable[[dict], None]] = None,
                 on_selection: Optional[Callable[[Any], None]] = None):
        """Initialize with the caller's state and callbacks.

        Args:
            expanded_state: Current expansion map (None = static mode)
            on_expanded_state_change: Receives the full new expansion map
            on_selection: Receives the raw node on select()
        """
        self.expanded_state = expanded_state
        self.on_expanded_state_change = on_expanded_state_change
        self.on_selection = on_selection

    def decorate(self, entry: RawVisibleEntry) -> 'VisibleNode':
        """Wrap one raw entry."""
        return VisibleNode(
            node=entry.node,
            id=entry.node_id,
            level=entry.level,
            parent_id=entry.parent_id,
            has_children=entry.has_children,
            is_expanded=entry.is_expanded,
            _decorator=self,
        )

    def decorate_all(self, entries: List[RawVisibleEntry]) -> List['VisibleNode']:
        """Wrap every entry of a pass, keeping order."""
        return [self.decorate(entry) for entry in entries]

    def select(self, node: Any) -> None:
        """Report ``node`` to the selection callback.

        Raises:
            MissingCallbackError: If no on_selection callback was configured
        """
        if self.on_selection is None:
            raise MissingCallbackError('on_selection', 'select')
        self.on_selection(node)

    def toggle_expanded(self, node_id: Any) -> None:
        """Report a new expansion map with ``node_id`` flipped.

        An absent entry counts as collapsed, so the first toggle expands.
        In static always-expanded mode there is no map to flip and the
        callback is not called.

        Raises:
            MissingCallbackError: If no on_expanded_state_change callback
                was configured
        """
        if self.on_expanded_state_change is None:
            raise MissingCallbackError('on_expanded_state_change', 'toggle_expanded')

        if self.expanded_state is None:
            logger.debug("Ignoring toggle of %r: no expanded_state supplied", node_id)
            return

        new_state = dict(self.expanded_state)
        new_state[node_id] = not (self.expanded_state.get(node_id) is True)
        self.on_expanded_state_change(new_state)


@dataclass(frozen=True)
class VisibleNode:
    """One row of the visible list.

    Fields of the underlying node are readable straight off the row, as
    attributes or by key (``row.name`` / ``row['name']``). Rows are never
    updated; each flattening pass creates new ones.
    """

    node: Any = field(hash=False)
    id: Any
    level: int
    parent_id: Any
    has_children: bool
    is_expanded: bool
    _decorator: NodeDecorator = field(repr=False, compare=False, hash=False)

    def select(self) -> None:
        """Invoke the selection callback with the underlying node."""
        self._decorator.select(self.node)

    def toggle_expanded(self) -> None:
        """Invoke the expansion callback with this node flipped."""
        self._decorator.toggle_expanded(self.id)

    def is_selected(self, candidate_id: Any) -> bool:
        """Check whether ``candidate_id`` is this node's id."""
        return candidate_id == self.id

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not fields or methods
        if name.startswith('__'):
            raise AttributeError(name)
        node = self.__dict__.get('node')
        if node is None:
            raise AttributeError(name)
        value = read_field(node, name, _NO_FIELD)
        if value is _NO_FIELD:
            raise AttributeError(
                f"{type(self).__name__} has no attribute {name!r} "
                f"and its node has no such field"
            )
        return value

    def __getitem__(self, key: str) -> Any:
        value = read_field(self.node, key, _NO_FIELD)
        if value is _NO_FIELD:
            raise KeyError(key)
        return value


_NO_FIELD = object()
