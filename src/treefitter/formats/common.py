"""Query helpers shared by several format tables."""

from typing import List, Optional
from ..models.node import Node, Primitive


def child_value(node: Node, key: str) -> Primitive:
    """Value of the first child named ``key``, or None."""
    child = node.find_child(key)
    return child.value if child is not None else None


def navigate_by_name(node: Node, path: List[str]) -> Optional[Node]:
    """Follow each path segment as a direct child-name lookup."""
    current = node
    for segment in path:
        current = current.find_child(segment)
        if current is None:
            return None
    return current


def replace_children(container: Node, items: List[Node]) -> Node:
    """Rebuild a container whose children are exactly ``items``."""
    return container.evolve(children=list(items))
