"""Keyboard navigation over a visible list.

The navigator is stateless: the caller supplies the index of the row that
currently has focus, and the navigator selects its neighbour.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Iterable, Optional, Sequence, Tuple

from .decorator import VisibleNode


logger = logging.getLogger(__name__)


class NavigationKey(Enum):
    """Key names understood by the default keymap."""
    NEXT = "ArrowDown"
    PREVIOUS = "ArrowUp"


DEFAULT_NEXT_KEYS: Tuple[str, ...] = (NavigationKey.NEXT.value,)
DEFAULT_PREVIOUS_KEYS: Tuple[str, ...] = (NavigationKey.PREVIOUS.value,)


def key_of(event: Any) -> Optional[str]:
    """Extract a key name from a key string, a mapping or an event object.

    Returns:
        The key name, or None if the event carries none
    """
    if isinstance(event, NavigationKey):
        return event.value
    if isinstance(event, str):
        return event
    if isinstance(event, Mapping):
        return event.get('key')
    return getattr(event, 'key', None)


class KeyboardNavigator:
    """Maps next/previous key presses to ``select()`` on a neighbouring row."""

    def __init__(self,
                 next_keys: Iterable[str] = DEFAULT_NEXT_KEYS,
                 previous_keys: Iterable[str] = DEFAULT_PREVIOUS_KEYS):
        """Initialize with a keymap.

        Args:
            next_keys: Keys that move to the following row
            previous_keys: Keys that move to the preceding row
        """
        self.next_keys = frozenset(next_keys)
        self.previous_keys = frozenset(previous_keys)

    def handle_key(self,
                   event: Any,
                   current_index: int,
                   visible_list: Sequence[VisibleNode]) -> Optional[VisibleNode]:
        """Select the row after or before ``current_index``.

        Moving past either end of the list does nothing. Keys outside the
        keymap are ignored.

        Args:
            event: Key string, mapping with a 'key' entry, or object with
                a ``key`` attribute
            current_index: Index of the focused row in ``visible_list``
            visible_list: Rows of the current flattening pass

        Returns:
            The row that was selected, or None if nothing was selected
        """
        key = key_of(event)
        if key in self.next_keys:
            target = current_index + 1
        elif key in self.previous_keys:
            target = current_index - 1
        else:
            return None

        if target < 0 or target >= len(visible_list):
            logger.debug("Navigation from %d to %d is out of bounds", current_index, target)
            return None

        node = visible_list[target]
        node.select()
        return node
