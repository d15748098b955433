"""DazzleTreeView - flatten any tree into a renderable list.

DazzleTreeView turns hierarchical data of any shape into the ordered list
of rows a linear renderer (a terminal pane, a list widget, a virtualized
table) should show, honouring caller-owned expansion state, search and
sort order, and binding select/expand handles to caller callbacks.

Quick start:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from dazzletreeview import TreeView

    view = TreeView(data=tree, expanded_state={'root': True})
    for row in view.visible_list:
        print("  " * row.level + row.name)
━━━━━━━━━━━━━━━━━━━━━━━━━━
"""

import logging

__version__ = "0.1.0"

from .errors import TreeViewError, ConfigurationError, AccessorError, MissingCallbackError
from .config import TreeViewConfig
from .core import (
    NodeAccessor,
    FieldAccessor,
    CallableAccessor,
    FlatTreeAccessor,
    ChildrenCache,
    CacheValidation,
    SearchMatcher,
    NameSubstringMatcher,
    CallableMatcher,
    TraversalEngine,
    RawVisibleEntry,
    NodeDecorator,
    VisibleNode,
    KeyboardNavigator,
    NavigationKey,
)
from .api import TreeView, build_visible_list, navigate_with_key

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Errors
    "TreeViewError",
    "ConfigurationError",
    "AccessorError",
    "MissingCallbackError",
    # Config
    "TreeViewConfig",
    "CacheValidation",
    # Core
    "NodeAccessor",
    "FieldAccessor",
    "CallableAccessor",
    "FlatTreeAccessor",
    "ChildrenCache",
    "SearchMatcher",
    "NameSubstringMatcher",
    "CallableMatcher",
    "TraversalEngine",
    "RawVisibleEntry",
    "NodeDecorator",
    "VisibleNode",
    "KeyboardNavigator",
    "NavigationKey",
    # API
    "TreeView",
    "build_visible_list",
    "navigate_with_key",
]
