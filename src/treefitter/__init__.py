"""
treefitter - Format-neutral trees with semantic conversion and querying.

Represents JSON-like, XML-like and CSV-like data as one node model, converts
trees between format conventions through declarative rule tables, and runs
uniform filter/map/group/sort operations over any registered format.
"""

from .adapters import ObjectAdapter
from .config import Configuration, LogLevel
from .engines import FormatAwareOperations, FormatAwareQuery, TransformationEngine
from .formats import CSV_SEMANTICS, JSON_SEMANTICS, XML_SEMANTICS, builtin_formats
from .models import (
    Context,
    FormatSemantics,
    Message,
    Node,
    QueryStrategy,
    create_message,
    create_node,
    is_node,
)
from .profiler import OperationProfiler
from .registry import FormatRegistry
from .types import (
    FormatType,
    NodeKind,
    NotRegisteredError,
    SemanticRole,
    StructuralCategory,
    TransformationStrategy,
    TreeFitterError,
)
from .validation import NodeValidator

__version__ = "1.0.0"
__all__ = [
    "ObjectAdapter",
    "Configuration",
    "LogLevel",
    "TransformationEngine",
    "FormatAwareOperations",
    "FormatAwareQuery",
    "CSV_SEMANTICS",
    "JSON_SEMANTICS",
    "XML_SEMANTICS",
    "builtin_formats",
    "Context",
    "FormatSemantics",
    "Message",
    "Node",
    "QueryStrategy",
    "create_message",
    "create_node",
    "is_node",
    "OperationProfiler",
    "FormatRegistry",
    "FormatType",
    "NodeKind",
    "NotRegisteredError",
    "SemanticRole",
    "StructuralCategory",
    "TransformationStrategy",
    "TreeFitterError",
    "NodeValidator",
]
