"""High-level API for DazzleTreeView.

``TreeView`` is the owning context for one data source: it holds the
engine (and therefore the children cache) across rebuilds, and rebuilds
the visible list only when an input actually changed. ``build_visible_list``
is a one-shot convenience for callers that do not need to keep a view.
"""

import logging
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from .config import TreeViewConfig
from .core.accessor import NodeAccessor
from .core.cache import ChildrenCache
from .core.decorator import NodeDecorator, VisibleNode
from .core.matcher import SearchMatcher, normalize_search_term
from .core.navigation import KeyboardNavigator, DEFAULT_NEXT_KEYS, DEFAULT_PREVIOUS_KEYS
from .core.traverser import TraversalEngine
from .errors import ConfigurationError


logger = logging.getLogger(__name__)


# Options whose change means cached children lists can no longer be trusted
_ACCESSOR_OPTIONS = ('get_id', 'get_children', 'accessor')
_CACHE_OPTIONS = ('cache_validation', 'cache_max_entries')
_MATCHER_OPTIONS = ('search_match',)
_KEYMAP_OPTIONS = ('next_keys', 'previous_keys')

# Plain values; compared by equality rather than identity
_VALUE_OPTIONS = _CACHE_OPTIONS + _KEYMAP_OPTIONS


class TreeView:
    """A flattened, renderable view of one tree.

    Inputs are compared by identity, the way a UI framework compares
    props: pass a new expansion map rather than mutating the old one, and
    a new root rather than editing nodes in place. Callers that do mutate
    in place can call ``refresh()`` (and ``cache.invalidate()``).

    Example:
        view = TreeView(data=tree, expanded_state={'root': True},
                        on_expanded_state_change=store.set_expanded)
        for row in view.visible_list:
            render(row.level, row.name, row.is_expanded)
        view.update(expanded_state=store.expanded)
    """

    def __init__(self, config: Optional[TreeViewConfig] = None, **options):
        """Create a view.

        Args:
            config: Complete configuration (optional)
            **options: TreeViewConfig fields, applied on top of ``config``

        Raises:
            ConfigurationError: If the configuration does not validate
        """
        base = config if config is not None else TreeViewConfig()
        config = base.replace(**options) if options else base
        _check(config)

        self.config = config
        self._accessor = config.resolve_accessor()
        self._matcher = config.resolve_matcher()
        self._navigator = _make_navigator(config)
        self.engine = TraversalEngine(cache=_make_cache(config), matcher=self._matcher)

        self._visible: Optional[List[VisibleNode]] = None
        self._built_from: Optional[Tuple[Any, ...]] = None

    @property
    def cache(self) -> ChildrenCache:
        """The children cache owned by this view."""
        return self.engine.cache

    @property
    def accessor(self) -> NodeAccessor:
        return self._accessor

    @property
    def matcher(self) -> SearchMatcher:
        return self._matcher

    @property
    def visible_list(self) -> List[VisibleNode]:
        """Current visible rows, rebuilt only if an input changed."""
        inputs = self._inputs()
        if self._visible is None or not _same_inputs(inputs, self._built_from):
            self._visible = self._build()
            self._built_from = inputs
        return self._visible

    def update(self, **changes) -> List[VisibleNode]:
        """Apply new options and return the resulting visible list.

        Changing an accessor or the cache settings discards cached children.

        Raises:
            ConfigurationError: If an option is unknown or invalid
        """
        new_config = self.config.replace(**changes)
        _check(new_config)

        changed = {name for name, value in changes.items()
                   if _differs(name, getattr(self.config, name), value)}
        self.config = new_config

        if changed & set(_CACHE_OPTIONS):
            logger.debug("Cache settings changed; starting a fresh children cache")
            self.engine.cache = _make_cache(new_config)
        if changed & set(_ACCESSOR_OPTIONS):
            logger.debug("Accessor changed; clearing children cache")
            self._accessor = new_config.resolve_accessor()
            self.engine.cache.clear()
        if changed & set(_MATCHER_OPTIONS):
            self._matcher = new_config.resolve_matcher()
            self.engine.matcher = self._matcher
        if changed & set(_KEYMAP_OPTIONS):
            self._navigator = _make_navigator(new_config)

        return self.visible_list

    def refresh(self) -> List[VisibleNode]:
        """Rebuild the visible list even if no input changed identity."""
        self._visible = None
        return self.visible_list

    def navigate_with_key(self, event: Any, current_index: int) -> Optional[VisibleNode]:
        """Select the neighbour of ``current_index`` for a navigation key.

        Returns:
            The newly selected row, or None
        """
        return self._navigator.handle_key(event, current_index, self.visible_list)

    def find(self, node_id: Any) -> Optional[VisibleNode]:
        """Return the visible row with ``node_id``, if it is visible."""
        for row in self.visible_list:
            if row.id == node_id:
                return row
        return None

    def index_of(self, node_id: Any) -> Optional[int]:
        """Return the position of ``node_id`` in the visible list, if visible."""
        for index, row in enumerate(self.visible_list):
            if row.id == node_id:
                return index
        return None

    def __iter__(self) -> Iterator[VisibleNode]:
        return iter(self.visible_list)

    def __len__(self) -> int:
        return len(self.visible_list)

    def _inputs(self) -> Tuple[Any, ...]:
        config = self.config
        return (
            config.data,
            self._accessor,
            config.expanded_state,
            normalize_search_term(config.search_term),
            config.child_sort,
            config.show_root,
            self._matcher,
            config.on_expanded_state_change,
            config.on_selection,
            self.engine.cache,
        )

    def _build(self) -> List[VisibleNode]:
        config = self.config
        entries = self.engine.build(
            config.data,
            self._accessor,
            expanded_state=config.expanded_state,
            child_sort=config.child_sort,
            search_term=config.search_term,
            show_root=config.show_root,
            matcher=self._matcher,
        )
        decorator = NodeDecorator(
            expanded_state=config.expanded_state,
            on_expanded_state_change=config.on_expanded_state_change,
            on_selection=config.on_selection,
        )
        return decorator.decorate_all(entries)


def build_visible_list(data: Any, **options) -> List[VisibleNode]:
    """Flatten ``data`` once and return the visible rows.

    Args:
        data: Root node
        **options: Any TreeViewConfig field

    Returns:
        List of VisibleNode in display order

    Example:
        >>> rows = build_visible_list(tree, expanded_state={'root': True})
        >>> [row.id for row in rows]
        ['root', 'folder', 'folder2']
    """
    return TreeView(data=data, **options).visible_list


def navigate_with_key(event: Any,
                      current_index: int,
                      visible_list: Sequence[VisibleNode],
                      next_keys: Sequence[str] = DEFAULT_NEXT_KEYS,
                      previous_keys: Sequence[str] = DEFAULT_PREVIOUS_KEYS) -> Optional[VisibleNode]:
    """Select the neighbour of ``current_index`` in ``visible_list``.

    Returns:
        The newly selected row, or None
    """
    navigator = KeyboardNavigator(next_keys=next_keys, previous_keys=previous_keys)
    return navigator.handle_key(event, current_index, visible_list)


def _check(config: TreeViewConfig) -> None:
    errors = config.validate()
    if errors:
        raise ConfigurationError(f"Invalid tree view configuration: {'; '.join(errors)}")


def _make_cache(config: TreeViewConfig) -> ChildrenCache:
    return ChildrenCache(max_entries=config.cache_max_entries,
                         validation=config.cache_validation)


def _make_navigator(config: TreeViewConfig) -> KeyboardNavigator:
    return KeyboardNavigator(next_keys=config.next_keys, previous_keys=config.previous_keys)


def _same_inputs(current: Tuple[Any, ...], previous: Optional[Tuple[Any, ...]]) -> bool:
    if previous is None or len(current) != len(previous):
        return False
    return all(a is b for a, b in zip(current, previous))


def _differs(name: str, old: Any, new: Any) -> bool:
    if name in _VALUE_OPTIONS:
        return old != new
    return old is not new
