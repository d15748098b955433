"""Core components of DazzleTreeView.

Accessors read caller nodes, the cache remembers resolved children, the
engine flattens, the decorator binds callbacks, and the navigator moves
selection through the result.
"""

from .accessor import NodeAccessor, FieldAccessor, CallableAccessor, FlatTreeAccessor
from .cache import ChildrenCache, CacheEntry, CacheValidation
from .matcher import SearchMatcher, NameSubstringMatcher, CallableMatcher, normalize_search_term
from .traverser import TraversalEngine, RawVisibleEntry
from .decorator import NodeDecorator, VisibleNode
from .navigation import KeyboardNavigator, NavigationKey

__all__ = [
    "NodeAccessor",
    "FieldAccessor",
    "CallableAccessor",
    "FlatTreeAccessor",
    "ChildrenCache",
    "CacheEntry",
    "CacheValidation",
    "SearchMatcher",
    "NameSubstringMatcher",
    "CallableMatcher",
    "normalize_search_term",
    "TraversalEngine",
    "RawVisibleEntry",
    "NodeDecorator",
    "VisibleNode",
    "KeyboardNavigator",
    "NavigationKey",
]
