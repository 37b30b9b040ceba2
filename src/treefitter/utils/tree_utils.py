"""Traversal helpers for node trees and graphs."""

from typing import Iterator, Set
from ..models.node import Node


def iter_nodes(node: Node, include_attributes: bool = True) -> Iterator[Node]:
    """
    Yield every node reachable through children (and attributes), depth first.

    Each node is yielded once even when shared or cyclic. Back-references are
    not followed.
    """
    seen: Set[int] = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        nested = list(current.children or [])
        if include_attributes:
            nested.extend(current.attributes or [])
        stack.extend(reversed(nested))


def count_nodes(node: Node, include_attributes: bool = True) -> int:
    """Count distinct nodes reachable from ``node``."""
    return sum(1 for _ in iter_nodes(node, include_attributes))


def max_depth(node: Node) -> int:
    """
    Depth of the deepest child chain; a single node has depth 1.

    Cycles through children are cut at the first revisit.
    """
    best = 0
    stack = [(node, 1, frozenset())]
    while stack:
        current, depth, path = stack.pop()
        best = max(best, depth)
        path = path | {id(current)}
        for child in current.children or []:
            if id(child) not in path:
                stack.append((child, depth + 1, path))
    return best


def has_child_cycle(node: Node) -> bool:
    """Check whether a node is its own descendant through ``children``."""
    on_path: Set[int] = set()
    done: Set[int] = set()

    def visit(current: Node) -> bool:
        key = id(current)
        if key in on_path:
            return True
        if key in done:
            return False
        on_path.add(key)
        for child in current.children or []:
            if visit(child):
                return True
        on_path.discard(key)
        done.add(key)
        return False

    return visit(node)
