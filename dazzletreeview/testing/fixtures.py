"""Test fixtures for DazzleTreeView consumers.

Generators for realistic trees of named nodes, in nested and flat
(id-indexed) form, and a call counter for asserting cache hits.
"""

import random
from typing import Any, Callable, Dict, List, Optional


_FIRST_NAMES = [
    "Ada", "Basil", "Cleo", "Dmitri", "Edda", "Farah", "Gus", "Hana",
    "Ivo", "Juno", "Kofi", "Lena", "Milo", "Nia", "Otto", "Pia",
    "Quin", "Rosa", "Sami", "Tove", "Uma", "Vik", "Wren", "Yara",
]

_PETS = ["Cat", "Dog", "Ferret", "Finch", "Gecko", "Hamster", "Newt", "Rabbit"]


def create_name_tree(count: int = 100,
                     max_children: int = 5,
                     seed: int = 0) -> Dict[str, Any]:
    """Build a nested tree of ``count`` named nodes under a root.

    Each new node is attached to a random earlier node that still has room,
    so the shape varies with ``seed`` but is reproducible.

    Args:
        count: Number of nodes below the root
        max_children: Maximum children per node
        seed: Random seed

    Returns:
        Root dict with 'id', 'name' and (where non-empty) 'children'
    """
    rng = random.Random(seed)
    root: Dict[str, Any] = {'id': 'root', 'name': 'Root'}
    open_parents: List[Dict[str, Any]] = [root]

    for index in range(count):
        parent = rng.choice(open_parents)
        node = {
            'id': f"node-{index}",
            'name': f"{rng.choice(_FIRST_NAMES)} the {rng.choice(_PETS)} {index}",
        }
        parent.setdefault('children', []).append(node)
        if len(parent['children']) >= max_children:
            open_parents.remove(parent)
        open_parents.append(node)

    return root


def create_flat_tree(tree: Dict[str, Any],
                     children_field: str = 'children') -> Dict[str, Dict[str, Any]]:
    """Flatten a nested tree into an id-indexed table.

    Nodes in the result list the ids of their children under
    ``children_field`` instead of nesting them.

    Args:
        tree: Root of a nested tree (as from create_name_tree)
        children_field: Field name for child id lists in the result

    Returns:
        Mapping of id -> node copy
    """
    table: Dict[str, Dict[str, Any]] = {}
    stack = [tree]
    while stack:
        node = stack.pop()
        flat = {key: value for key, value in node.items() if key != 'children'}
        children = node.get('children') or []
        if children:
            flat[children_field] = [child['id'] for child in children]
        table[node['id']] = flat
        stack.extend(children)
    return table


class CallCounter:
    """Wraps a callable and counts how often it is invoked.

    Example:
        comparator = CallCounter(lambda a, b: (a['name'] > b['name']) - (a['name'] < b['name']))
        view = TreeView(data=tree, child_sort=comparator)
        view.visible_list
        assert comparator.calls > 0
    """

    def __init__(self, func: Optional[Callable[..., Any]] = None):
        self.func = func
        self.calls = 0
        self.last_args: Optional[tuple] = None

    def __call__(self, *args, **kwargs) -> Any:
        self.calls += 1
        self.last_args = args
        if self.func is None:
            return None
        return self.func(*args, **kwargs)

    def reset(self) -> None:
        """Zero the counter."""
        self.calls = 0
        self.last_args = None
