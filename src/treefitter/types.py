"""Core type definitions for treefitter."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .models.format_semantics import FormatSemantics
    from .models.message import Message
    from .models.node import Node


class NodeKind(Enum):
    """Enumeration of format-neutral node kinds."""
    COLLECTION = "collection"    # arrays, documents, result sets
    RECORD = "record"            # objects, rows, elements
    FIELD = "field"              # properties, columns
    VALUE = "value"              # primitive leaves
    ATTRIBUTES = "attributes"    # XML attributes and other metadata
    COMMENT = "comment"
    INSTRUCTION = "instruction"  # <?xml?>, pragmas
    CUSTOM = "custom"


class SemanticRole(Enum):
    """Format-independent meaning of a node."""
    ROOT = "root"
    CONTAINER = "container"
    ITEM = "item"
    PROPERTY = "property"
    VALUE = "value"
    METADATA = "metadata"
    ANNOTATION = "annotation"


class TransformationStrategy(Enum):
    """How a role-tagged subtree is rebuilt in a target format."""
    PRESERVE = "preserve"
    CONVERT = "convert"
    FLATTEN = "flatten"
    PROMOTE = "promote"
    DEMOTE = "demote"
    DROP = "drop"


class StructuralCategory(Enum):
    """Structural categories a format assigns transformation strategies to."""
    COLLECTIONS = "collections"
    RECORDS = "records"
    ATTRIBUTES = "attributes"
    COMMENTS = "comments"


class FormatType(Enum):
    """Format identifiers understood by the registry."""
    JSON = "json"
    XML = "xml"
    CSV = "csv"
    YAML = "yaml"
    DATABASE = "database"
    CUSTOM = "custom"


class ErrorType(Enum):
    """Enumeration of error types."""
    NOT_REGISTERED = "not_registered"
    FORMAT = "format"
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    ADAPTER = "adapter"


# Roles a format must be able to write to serve as a conversion target
CORE_ROLES = (SemanticRole.CONTAINER, SemanticRole.ITEM, SemanticRole.VALUE)

ROLE_CATEGORIES: Dict[SemanticRole, StructuralCategory] = {
    SemanticRole.CONTAINER: StructuralCategory.COLLECTIONS,
    SemanticRole.ITEM: StructuralCategory.RECORDS,
    SemanticRole.METADATA: StructuralCategory.ATTRIBUTES,
    SemanticRole.ANNOTATION: StructuralCategory.COMMENTS,
}


@dataclass
class ValidationError:
    """Validation error details."""
    type: ErrorType
    message: str
    location: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of node validation."""
    is_valid: bool
    errors: List[ValidationError]
    warnings: List[str]


class TreeFitterError(Exception):
    """Base exception for treefitter errors."""

    def __init__(self, message: str, error_type: ErrorType, context: Optional[Any] = None):
        super().__init__(message)
        self.error_type = error_type
        self.context = context


class NotRegisteredError(TreeFitterError):
    """Raised when a format identifier has no registered semantics."""

    def __init__(self, format: Any):
        name = format.value if isinstance(format, FormatType) else str(format)
        super().__init__(
            f"No semantics registered for format: {name}",
            ErrorType.NOT_REGISTERED,
            context={"format": format}
        )
        self.format = format


class FormatError(TreeFitterError):
    """Raised when a format semantics record is malformed."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.FORMAT, context)


class ConfigurationError(TreeFitterError):
    """Raised for invalid configuration values."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.CONFIGURATION, context)


class AdapterError(TreeFitterError):
    """Raised when an adapter cannot map external data onto nodes."""

    def __init__(self, message: str, context: Optional[Any] = None):
        super().__init__(message, ErrorType.ADAPTER, context)


# Abstract base classes for interfaces

class TransformationEngineInterface(ABC):
    """Abstract interface for the transformation engine."""

    @abstractmethod
    def convert(self, node: 'Node', source_format: FormatType,
                target_format: FormatType) -> 'Node':
        """Convert a node tree from one format's conventions to another's."""
        pass

    @abstractmethod
    def convert_envelope(self, message: 'Message', source_format: FormatType,
                         target_format: FormatType) -> 'Message':
        """Convert a message payload and stamp provenance metadata."""
        pass

    @abstractmethod
    def is_compatible(self, source_format: FormatType, target_format: FormatType) -> bool:
        """Check whether the target format can represent the source's core roles."""
        pass

    @abstractmethod
    def get_semantics(self, format: FormatType) -> 'FormatSemantics':
        """Look up the semantics record for a format."""
        pass


class FormatAwareOperationsInterface(ABC):
    """Abstract interface for format-aware query operations."""

    @abstractmethod
    def find_items(self, message: 'Message', format: FormatType) -> List['Node']:
        """Locate the queryable items of a message payload."""
        pass

    @abstractmethod
    def filter(self, message: 'Message', predicate: Callable[['Node'], bool],
               format: FormatType) -> 'Message':
        """Keep only the items matching a predicate."""
        pass

    @abstractmethod
    def transform(self, message: 'Message', transformer: Callable[['Node'], 'Node'],
                  format: FormatType) -> 'Message':
        """Replace every item with the transformer's result."""
        pass
