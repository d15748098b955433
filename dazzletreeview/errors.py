"""Exception types for DazzleTreeView.

Configuration and accessor problems surface as ``TypeError`` subclasses at
the point of use. Missing callbacks are reported lazily, only when the
handle that needs them is actually invoked.
"""

from typing import Optional


class TreeViewError(Exception):
    """Base class for all DazzleTreeView errors."""
    pass


class ConfigurationError(TreeViewError, TypeError):
    """Raised when a TreeViewConfig cannot be used as given."""
    pass


class AccessorError(TreeViewError, TypeError):
    """Raised when a node accessor returns something unusable.

    Examples are a children accessor returning a string or a mapping
    instead of a collection of child nodes, or an identity accessor
    returning an unhashable value.
    """

    def __init__(self, message: str, node_id: Optional[object] = None):
        super().__init__(message)
        self.node_id = node_id


class MissingCallbackError(TreeViewError):
    """Raised when a node handle needs a callback that was never configured.

    Raised by ``VisibleNode.select()`` and ``VisibleNode.toggle_expanded()``
    at call time, never while the visible list is built.
    """

    def __init__(self, option_name: str, operation: str):
        self.option_name = option_name
        self.operation = operation
        super().__init__(
            f"{operation}() was called but no '{option_name}' callback was "
            f"configured. Pass '{option_name}' to the tree view to make "
            f"{operation}() do something."
        )
