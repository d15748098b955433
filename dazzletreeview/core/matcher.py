"""Search matching for DazzleTreeView.

A non-empty search term switches the engine into search mode, where the
matcher decides which nodes (and therefore which paths) stay visible.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional

from .accessor import read_field


def normalize_search_term(term: Optional[str]) -> Optional[str]:
    """Return the term if it activates search mode, otherwise None.

    None and the empty string both mean "no search". Whitespace is kept
    as-is; a term of spaces is a real search for spaces.
    """
    if term is None or term == "":
        return None
    return term


class SearchMatcher(ABC):
    """Decides whether a single node matches a search term."""

    @abstractmethod
    def matches(self, node: Any, term: str) -> bool:
        """Check whether ``node`` matches ``term``.

        Args:
            node: Caller node
            term: Non-empty search term

        Returns:
            True if the node matches
        """
        pass


class NameSubstringMatcher(SearchMatcher):
    """Default matcher: case-sensitive substring of the ``name`` field.

    Nodes without the field never match.
    """

    def __init__(self, field: str = 'name'):
        self.field = field

    def matches(self, node: Any, term: str) -> bool:
        value = read_field(node, self.field, None)
        if value is None:
            return False
        return term in str(value)


class CallableMatcher(SearchMatcher):
    """Matcher wrapping a caller function ``(node, term) -> bool``."""

    def __init__(self, func: Callable[[Any, str], bool]):
        self.func = func

    def matches(self, node: Any, term: str) -> bool:
        return bool(self.func(node, term))
