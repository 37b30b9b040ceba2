"""Utility functions for treefitter."""

from .tree_utils import count_nodes, has_child_cycle, iter_nodes, max_depth

__all__ = ["count_nodes", "has_child_cycle", "iter_nodes", "max_depth"]
