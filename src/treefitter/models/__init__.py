"""Data models for treefitter."""

from .node import Node, Primitive, create_node, is_node
from .semantic_node import SemanticNode
from .message import Context, Message, create_message
from .format_semantics import FormatSemantics, QueryStrategy

__all__ = [
    "Node",
    "Primitive",
    "create_node",
    "is_node",
    "SemanticNode",
    "Context",
    "Message",
    "create_message",
    "FormatSemantics",
    "QueryStrategy",
]
