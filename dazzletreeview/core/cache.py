"""Children cache for DazzleTreeView.

Memoizes, per parent identity, the resolved and sorted children list so
that re-flattening after an expansion toggle or a search-term change does
not call the caller's children accessor or sort comparator again for
subtrees whose inputs are unchanged.
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from cachetools import LRUCache

from .accessor import NodeAccessor


logger = logging.getLogger(__name__)


class CacheValidation(Enum):
    """How a cached children list is checked for staleness."""
    REFERENCE = "reference"     # Same parent node object required
    IDENTIFIER = "identifier"   # Same parent id is enough


@dataclass(frozen=True)
class CacheEntry:
    """One cached children list and the inputs it was derived from."""
    node: Any
    comparator: Optional[Callable[[Any, Any], int]]
    accessor: NodeAccessor
    children: Tuple[Any, ...]

    def stale_reason(self,
                     node: Any,
                     accessor: NodeAccessor,
                     comparator: Optional[Callable[[Any, Any], int]],
                     validation: CacheValidation) -> Optional[str]:
        """Return why this entry cannot be reused, or None if it can."""
        if self.accessor is not accessor:
            return "accessor changed"
        if self.comparator is not comparator:
            return "comparator changed"
        if validation is CacheValidation.REFERENCE and self.node is not node:
            return "node changed"
        if validation is CacheValidation.REFERENCE and not accessor.children_current(self.children):
            return "child replaced"
        return None


class ChildrenCache:
    """Per-parent cache of resolved, sorted children.

    Entries are keyed by parent identity and remember the parent node
    reference, the accessor and the comparator they were built from. An
    entry is rebuilt only when one of those differs. Expansion state and
    search term are not inputs and never invalidate anything.

    Storage is a bounded ``cachetools.LRUCache``; eviction only costs a
    recomputation.

    Example:
        cache = ChildrenCache()
        children = cache.get(node, accessor, comparator)
        cache.get_stats()['hits']
    """

    def __init__(self,
                 max_entries: int = 100_000,
                 validation: CacheValidation = CacheValidation.REFERENCE):
        """Initialize an empty cache.

        Args:
            max_entries: Maximum number of parents to remember
            validation: Staleness policy for cached entries
        """
        self.validation = validation
        self.max_entries = max_entries
        self._store: LRUCache = LRUCache(maxsize=max_entries)
        self.hits = 0
        self.misses = 0

    def get(self,
            node: Any,
            accessor: NodeAccessor,
            comparator: Optional[Callable[[Any, Any], int]] = None,
            node_id: Any = None) -> Tuple[Any, ...]:
        """Return the ordered children of ``node``.

        Args:
            node: Parent node
            accessor: Accessor used to resolve identity and children
            comparator: Optional three-way comparator over siblings
            node_id: Parent identity, if the caller already resolved it

        Returns:
            Tuple of child nodes in accessor order, or comparator order
            when a comparator is given (stable for ties)
        """
        if node_id is None:
            node_id = accessor.resolve_id(node)

        entry = self._store.get(node_id)
        if entry is not None:
            reason = entry.stale_reason(node, accessor, comparator, self.validation)
            if reason is None:
                self.hits += 1
                return entry.children
        else:
            reason = "new"

        self.misses += 1
        logger.debug("Resolving children of %r (%s)", node_id, reason)

        children = accessor.resolve_children(node)
        if comparator is not None and len(children) > 1:
            children.sort(key=functools.cmp_to_key(comparator))

        entry = CacheEntry(
            node=node,
            comparator=comparator,
            accessor=accessor,
            children=tuple(children),
        )
        self._store[node_id] = entry
        return entry.children

    def peek(self, node_id: Any) -> Optional[CacheEntry]:
        """Return the cached entry for an id without touching statistics."""
        return self._store.get(node_id)

    def invalidate(self, node_id: Any = None) -> int:
        """Drop cached entries.

        Needed only when caller data is mutated in place, since the cache
        cannot see such changes.

        Args:
            node_id: Parent id to drop (None = drop everything)

        Returns:
            Number of entries removed
        """
        if node_id is None:
            count = len(self._store)
            self.clear()
            return count

        if node_id in self._store:
            del self._store[node_id]
            logger.debug("Invalidated children of %r", node_id)
            return 1
        return 0

    def clear(self):
        """Clear all cache entries."""
        self._store.clear()
        logger.debug("Children cache cleared")

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dictionary with entries, hits, misses and (when any lookups
            happened) hit_rate
        """
        stats = {
            'entries': len(self._store),
            'max_entries': self.max_entries,
            'hits': self.hits,
            'misses': self.misses,
        }

        total_attempts = self.hits + self.misses
        if total_attempts > 0:
            stats['hit_rate'] = self.hits / total_attempts

        return stats

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, node_id: Any) -> bool:
        return node_id in self._store
