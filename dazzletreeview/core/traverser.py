"""Tree flattening for DazzleTreeView.

The TraversalEngine walks a tree depth-first through a NodeAccessor and
produces the ordered list of entries a linear renderer should show. It
never mutates caller data or caller state.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Tuple

from .accessor import NodeAccessor
from .cache import ChildrenCache
from .matcher import SearchMatcher, NameSubstringMatcher, normalize_search_term


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawVisibleEntry:
    """One visible position in the flattened tree, before decoration."""
    node: Any
    node_id: Any
    level: int
    parent_id: Any
    has_children: bool
    is_expanded: bool


class TraversalEngine:
    """Depth-first flattening engine.

    Default mode emits a pre-order walk in which a node's children are
    visited only if the node is expanded. Search mode ignores expansion
    state and emits every node that matches the term or has a matching
    descendant, forcing the ancestors of matches open.

    One engine owns one ChildrenCache. Do not share an engine between
    unrelated data sources.

    Note:
        Cycles in the data are not detected. A cyclic graph makes the walk
        run forever in both modes.
    """

    def __init__(self,
                 cache: Optional[ChildrenCache] = None,
                 matcher: Optional[SearchMatcher] = None):
        """Initialize the engine.

        Args:
            cache: Children cache to use (a fresh one if omitted)
            matcher: Default search matcher (substring of 'name')
        """
        self.cache = cache if cache is not None else ChildrenCache()
        self.matcher = matcher or NameSubstringMatcher()
        self.nodes_visited = 0

    def build(self,
              root: Any,
              accessor: NodeAccessor,
              expanded_state: Optional[Mapping[Any, bool]] = None,
              child_sort: Optional[Callable[[Any, Any], int]] = None,
              search_term: Optional[str] = None,
              show_root: bool = True,
              matcher: Optional[SearchMatcher] = None) -> List[RawVisibleEntry]:
        """Flatten the tree under ``root`` into visible entries.

        Args:
            root: Root node
            accessor: Identity/children accessor
            expanded_state: Mapping id -> bool, or None for static
                always-expanded mode
            child_sort: Optional three-way comparator over siblings
            search_term: Non-empty term activates search mode
            show_root: Whether the root itself is emitted
            matcher: Search matcher overriding the engine default

        Returns:
            Entries in pre-order. The root (when shown) is level 0; when the
            root is hidden its children are level 0. Every entry but a shown
            root carries its traversal parent's id, including the children
            of a hidden root.
        """
        self.nodes_visited = 0
        term = normalize_search_term(search_term)
        root_id = accessor.resolve_id(root)

        if term is None:
            entries = self._build_expanded(root, root_id, accessor, expanded_state,
                                           child_sort, show_root)
        else:
            entries = self._build_search(root, root_id, accessor, child_sort, show_root,
                                         term, matcher or self.matcher)

        logger.debug(
            "Flattened tree %r: %d visible of %d visited (mode=%s, show_root=%s)",
            root_id, len(entries), self.nodes_visited,
            "search" if term is not None else ("static" if expanded_state is None else "expansion"),
            show_root,
        )
        return entries

    def _build_expanded(self,
                        root: Any,
                        root_id: Any,
                        accessor: NodeAccessor,
                        expanded_state: Optional[Mapping[Any, bool]],
                        child_sort: Optional[Callable[[Any, Any], int]],
                        show_root: bool) -> List[RawVisibleEntry]:
        """Pre-order walk gated by expansion state.

        Uses an explicit stack so deep trees do not hit the recursion limit.
        """
        entries: List[RawVisibleEntry] = []

        # Stack holds (node, node_id, level, parent_id); children are pushed
        # in reverse so they pop in order.
        stack: List[Tuple[Any, Any, int, Any]] = []

        if show_root:
            stack.append((root, root_id, 0, None))
        else:
            # A hidden root is always walked, whatever its own entry says
            self.nodes_visited += 1
            children = self.cache.get(root, accessor, child_sort, root_id)
            for child in reversed(children):
                stack.append((child, accessor.resolve_id(child), 0, root_id))

        while stack:
            node, node_id, level, parent_id = stack.pop()
            self.nodes_visited += 1

            children = self.cache.get(node, accessor, child_sort, node_id)
            has_children = len(children) > 0
            if expanded_state is None:
                is_expanded = has_children
            else:
                is_expanded = expanded_state.get(node_id) is True

            entries.append(RawVisibleEntry(
                node=node,
                node_id=node_id,
                level=level,
                parent_id=parent_id,
                has_children=has_children,
                is_expanded=is_expanded,
            ))

            if is_expanded and has_children:
                for child in reversed(children):
                    stack.append((child, accessor.resolve_id(child), level + 1, node_id))

        return entries

    def _build_search(self,
                      root: Any,
                      root_id: Any,
                      accessor: NodeAccessor,
                      child_sort: Optional[Callable[[Any, Any], int]],
                      show_root: bool,
                      term: str,
                      matcher: SearchMatcher) -> List[RawVisibleEntry]:
        """Whole-tree walk keeping only match paths.

        Each node reserves its slot in the output before its children are
        walked. Once the subtree is done, the slot is filled if the node
        matched or any descendant was emitted, otherwise the whole span is
        dropped again. Uses an explicit stack of frames, like the default
        walk, so deep trees do not hit the recursion limit.
        """
        entries: List[Optional[RawVisibleEntry]] = []

        # Frame: [node, node_id, level, parent_id, start, children, next_child]
        stack: List[list] = []

        def _enter(node: Any, node_id: Any, level: int, parent_id: Any) -> None:
            self.nodes_visited += 1
            start = len(entries)
            entries.append(None)
            children = self.cache.get(node, accessor, child_sort, node_id)
            stack.append([node, node_id, level, parent_id, start, children, 0])

        if show_root:
            _enter(root, root_id, 0, None)
            self._drain_search(stack, entries, accessor, term, matcher, _enter)
        else:
            self.nodes_visited += 1
            for child in self.cache.get(root, accessor, child_sort, root_id):
                _enter(child, accessor.resolve_id(child), 0, root_id)
                self._drain_search(stack, entries, accessor, term, matcher, _enter)

        return entries

    @staticmethod
    def _drain_search(stack: List[list],
                      entries: List[Optional[RawVisibleEntry]],
                      accessor: NodeAccessor,
                      term: str,
                      matcher: SearchMatcher,
                      enter: Callable[[Any, Any, int, Any], None]) -> None:
        """Run frames until the stack is empty, settling each on exit."""
        while stack:
            frame = stack[-1]
            node, node_id, level, parent_id, start, children, cursor = frame

            if cursor < len(children):
                frame[6] = cursor + 1
                child = children[cursor]
                enter(child, accessor.resolve_id(child), level + 1, node_id)
                continue

            stack.pop()
            has_visible_children = len(entries) > start + 1
            if has_visible_children or matcher.matches(node, term):
                entries[start] = RawVisibleEntry(
                    node=node,
                    node_id=node_id,
                    level=level,
                    parent_id=parent_id,
                    has_children=len(children) > 0,
                    is_expanded=has_visible_children,
                )
            else:
                del entries[start:]
