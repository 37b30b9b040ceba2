"""Chainable query builder over format-aware operations."""

from typing import Any, Callable, Dict, List, Optional, TypeVar, TYPE_CHECKING
from ..models.message import Message
from ..models.node import Node
from ..types import FormatType

if TYPE_CHECKING:
    from .format_aware_operations import FormatAwareOperations

T = TypeVar("T")


class FormatAwareQuery:
    """
    Fluent chain of operations over one message and format.

    Structural calls replace the builder's current message and return the
    builder; terminal calls read the current message.

    Example::
        result = (operations.query(message, FormatType.JSON)
                  .filter(lambda user: ...)
                  .sort_by(lambda user: ...)
                  .take(10)
                  .execute())
    """

    def __init__(self, message: Message, format: FormatType,
                 operations: 'FormatAwareOperations'):
        self.message = message
        self.format = format
        self.operations = operations

    def filter(self, predicate: Callable[[Node], bool]) -> 'FormatAwareQuery':
        self.message = self.operations.filter(self.message, predicate, self.format)
        return self

    def transform(self, transformer: Callable[[Node], Node]) -> 'FormatAwareQuery':
        self.message = self.operations.transform(self.message, transformer, self.format)
        return self

    def sort(self, comparator: Callable[[Node, Node], int]) -> 'FormatAwareQuery':
        self.message = self.operations.sort(self.message, comparator, self.format)
        return self

    def sort_by(self, key: Callable[[Node], Any], reverse: bool = False) -> 'FormatAwareQuery':
        self.message = self.operations.sort_by(self.message, key, self.format, reverse)
        return self

    def take(self, count: int) -> 'FormatAwareQuery':
        self.message = self.operations.take(self.message, count, self.format)
        return self

    def skip(self, count: int) -> 'FormatAwareQuery':
        self.message = self.operations.skip(self.message, count, self.format)
        return self

    def execute(self) -> Message:
        """Return the current message."""
        return self.message

    def map(self, mapper: Callable[[Node], T]) -> List[T]:
        return self.operations.map(self.message, mapper, self.format)

    def count(self, predicate: Optional[Callable[[Node], bool]] = None) -> int:
        return self.operations.count(self.message, self.format, predicate)

    def group_by(self, key_extractor: Callable[[Node], str]) -> Dict[str, List[Node]]:
        return self.operations.group_by(self.message, key_extractor, self.format)

    def find_first(self, predicate: Callable[[Node], bool]) -> Optional[Node]:
        return self.operations.find_first(self.message, predicate, self.format)
