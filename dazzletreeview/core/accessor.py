"""NodeAccessor abstraction for DazzleTreeView.

The accessor is what lets the engine flatten ANY caller data. Nodes are
opaque values; the accessor knows how to read an identity and an ordered
list of children from them. The engine never looks at a node any other way.
"""

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterable, Mapping
from typing import Any, Callable, List, Optional

from ..errors import AccessorError


_MISSING = object()


def read_field(node: Any, field: str, default: Any = _MISSING) -> Any:
    """Read a field from a mapping node or an attribute-style node.

    Args:
        node: Mapping or object
        field: Key or attribute name
        default: Value returned when the field is absent

    Returns:
        The field value

    Raises:
        AccessorError: If the field is absent and no default was given
    """
    if isinstance(node, Mapping):
        if field in node:
            return node[field]
    elif hasattr(node, field):
        return getattr(node, field)

    if default is _MISSING:
        raise AccessorError(f"{type(node).__name__} node has no '{field}' field")
    return default


class NodeAccessor(ABC):
    """Abstract capability pair for reading caller nodes.

    Subclasses implement ``get_id`` and ``get_children``. The engine calls
    ``resolve_id`` / ``resolve_children``, which validate what the raw
    methods return so that a misbehaving accessor fails where it is used.
    """

    @abstractmethod
    def get_id(self, node: Any) -> Any:
        """Return the identity of a node.

        The identity must be hashable and unique within one tree.
        """
        pass

    @abstractmethod
    def get_children(self, node: Any) -> Optional[Iterable]:
        """Return the children of a node, or None for a leaf."""
        pass

    def resolve_id(self, node: Any) -> Any:
        """Return the node identity, checking it can key a mapping.

        Raises:
            AccessorError: If the identity is unhashable
        """
        node_id = self.get_id(node)
        if not isinstance(node_id, Hashable):
            raise AccessorError(
                f"get_id returned unhashable {type(node_id).__name__}; "
                f"identities must be usable as mapping keys"
            )
        return node_id

    def resolve_children(self, node: Any) -> List[Any]:
        """Return the children of a node as a fresh list.

        None and empty collections both resolve to ``[]``.

        Raises:
            AccessorError: If get_children returned a string, a mapping or
                a non-iterable value
        """
        children = self.get_children(node)
        if children is None:
            return []
        if isinstance(children, (str, bytes, Mapping)) or not isinstance(children, Iterable):
            raise AccessorError(
                f"get_children must return a collection of nodes or None, "
                f"got {type(children).__name__}"
            )
        return list(children)

    def children_current(self, children: Iterable) -> bool:
        """Return whether previously resolved children are still the live nodes.

        Nested data reaches children only through their parent, so a
        parent that is unchanged implies unchanged children. Accessors that
        look children up elsewhere override this.
        """
        return True


class FieldAccessor(NodeAccessor):
    """Default accessor reading ``id`` and ``children`` fields.

    Works with dicts and with attribute-style objects (dataclasses,
    namedtuples, plain classes).
    """

    def __init__(self, id_field: str = 'id', children_field: str = 'children'):
        self.id_field = id_field
        self.children_field = children_field

    def get_id(self, node: Any) -> Any:
        return read_field(node, self.id_field)

    def get_children(self, node: Any) -> Optional[Iterable]:
        return read_field(node, self.children_field, None)

    def __repr__(self) -> str:
        return f"FieldAccessor(id_field={self.id_field!r}, children_field={self.children_field!r})"


class CallableAccessor(NodeAccessor):
    """Accessor built from a pair of caller functions."""

    def __init__(self,
                 get_id: Callable[[Any], Any],
                 get_children: Callable[[Any], Optional[Iterable]]):
        self._get_id = get_id
        self._get_children = get_children

    def get_id(self, node: Any) -> Any:
        return self._get_id(node)

    def get_children(self, node: Any) -> Optional[Iterable]:
        return self._get_children(node)


class FlatTreeAccessor(NodeAccessor):
    """Accessor for id-indexed node tables.

    Nodes list the ids of their children rather than the children
    themselves; children are looked up in the table on access::

        nodes = {
            'root': {'id': 'root', 'pets': ['a', 'b']},
            'a': {'id': 'a'},
            'b': {'id': 'b'},
        }
        accessor = FlatTreeAccessor(nodes, children_field='pets')
    """

    def __init__(self,
                 nodes: Mapping[Any, Any],
                 children_field: str = 'children',
                 id_field: str = 'id'):
        """Initialize with a lookup table.

        Args:
            nodes: Mapping of id -> node
            children_field: Field holding the list of child ids
            id_field: Field holding a node's own id
        """
        self.nodes = nodes
        self.children_field = children_field
        self.id_field = id_field

    def get_id(self, node: Any) -> Any:
        return read_field(node, self.id_field)

    def get_children(self, node: Any) -> Optional[List[Any]]:
        child_ids = read_field(node, self.children_field, None)
        if child_ids is None:
            return None
        if isinstance(child_ids, (str, bytes)):
            raise AccessorError(
                f"'{self.children_field}' must list child ids, got a string",
                node_id=self.get_id(node),
            )

        children = []
        for child_id in child_ids:
            try:
                children.append(self.nodes[child_id])
            except KeyError:
                raise AccessorError(
                    f"Child id {child_id!r} of node {self.get_id(node)!r} "
                    f"is not present in the node table",
                    node_id=child_id,
                ) from None
        return children

    def children_current(self, children: Iterable) -> bool:
        """Check every child is still the node the table holds for its id.

        A node replaced in the table (say, after a move) leaves its parent
        untouched, so the parent reference alone cannot tell.
        """
        nodes = self.nodes
        for child in children:
            if nodes.get(self.get_id(child), _MISSING) is not child:
                return False
        return True
