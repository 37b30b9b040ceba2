"""Functional operations over the items of a node, dispatched per format."""

import functools
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, TypeVar, TYPE_CHECKING
from ..models.format_semantics import FormatSemantics
from ..models.message import Message
from ..models.node import Node, Primitive
from ..types import FormatAwareOperationsInterface, FormatType
from .transformation_engine import TransformationEngine

if TYPE_CHECKING:
    from .query import FormatAwareQuery

T = TypeVar("T")
Predicate = Callable[[Node], bool]


class FormatAwareOperations(FormatAwareOperationsInterface):
    """
    Filter, map, group, sort and slice the items of a message payload.

    Which children count as items, how values are looked up and how a
    container is rebuilt around new items all come from the format's query
    strategy. Operations returning a message never modify their input and
    record a ``processing`` metadata namespace on the result.
    """

    def __init__(self, engine: TransformationEngine, logger: Optional[logging.Logger] = None):
        """
        Initialize the operations layer.

        Args:
            engine: Transformation engine whose registry resolves formats
            logger: Optional logger instance
        """
        self.engine = engine
        self.logger = logger or logging.getLogger(__name__)

    def _semantics(self, format: FormatType) -> FormatSemantics:
        return self.engine.get_semantics(format)

    def find_items(self, message: Message, format: FormatType) -> List[Node]:
        """Locate the queryable items of a message payload."""
        return list(self._semantics(format).query_strategy.find_items(message.data))

    def find(self, message: Message, predicate: Predicate, format: FormatType) -> List[Node]:
        """Return all items matching a predicate."""
        return [item for item in self.find_items(message, format) if predicate(item)]

    def filter(self, message: Message, predicate: Predicate, format: FormatType) -> Message:
        """
        Keep only the items matching a predicate.

        Args:
            message: Message to filter
            predicate: Item predicate
            format: Format the payload follows

        Returns:
            New message with the container rebuilt around the matching items
        """
        items = self.find_items(message, format)
        filtered = [item for item in items if predicate(item)]
        self.logger.debug(f"filter ({format.value}): {len(items)} -> {len(filtered)} items")
        return self._rebuild(message, filtered, format, {
            "operation": "filter",
            "originalCount": len(items),
            "filteredCount": len(filtered)
        })

    def map(self, message: Message, mapper: Callable[[Node], T], format: FormatType) -> List[T]:
        """Apply a function to every item and collect the results."""
        return [mapper(item) for item in self.find_items(message, format)]

    def transform(self, message: Message, transformer: Callable[[Node], Node],
                  format: FormatType) -> Message:
        """
        Replace every item with the transformer's result.

        Returns:
            New message with the container rebuilt around the new items
        """
        transformed = [transformer(item) for item in self.find_items(message, format)]
        self.logger.debug(f"transform ({format.value}): {len(transformed)} items")
        return self._rebuild(message, transformed, format, {
            "operation": "transform",
            "itemCount": len(transformed)
        })

    def reduce(self, message: Message, reducer: Callable[[T, Node, int], T],
               initial_value: T, format: FormatType) -> T:
        """
        Fold the items into a single value.

        Args:
            message: Message to reduce
            reducer: Called with (accumulator, item, index)
            initial_value: Starting accumulator
            format: Format the payload follows
        """
        accumulator = initial_value
        for index, item in enumerate(self.find_items(message, format)):
            accumulator = reducer(accumulator, item, index)
        return accumulator

    def find_first(self, message: Message, predicate: Predicate,
                   format: FormatType) -> Optional[Node]:
        """Return the first item matching a predicate, or None."""
        return next((item for item in self.find_items(message, format) if predicate(item)), None)

    def some(self, message: Message, predicate: Predicate, format: FormatType) -> bool:
        """Check whether any item matches a predicate."""
        return any(predicate(item) for item in self.find_items(message, format))

    def every(self, message: Message, predicate: Predicate, format: FormatType) -> bool:
        """Check whether all items match a predicate; True for no items."""
        return all(predicate(item) for item in self.find_items(message, format))

    def count(self, message: Message, format: FormatType,
              predicate: Optional[Predicate] = None) -> int:
        """Count items, optionally only those matching a predicate."""
        items = self.find_items(message, format)
        if predicate is None:
            return len(items)
        return sum(1 for item in items if predicate(item))

    def sort(self, message: Message, comparator: Callable[[Node, Node], int],
             format: FormatType) -> Message:
        """
        Sort items with a comparator returning negative, zero or positive.

        The sort is stable.
        """
        items = sorted(self.find_items(message, format), key=functools.cmp_to_key(comparator))
        return self._rebuild(message, items, format, {
            "operation": "sort",
            "itemCount": len(items)
        })

    def sort_by(self, message: Message, key: Callable[[Node], Any], format: FormatType,
                reverse: bool = False) -> Message:
        """Sort items by a key function. The sort is stable."""
        items = sorted(self.find_items(message, format), key=key, reverse=reverse)
        return self._rebuild(message, items, format, {
            "operation": "sort",
            "itemCount": len(items)
        })

    def take(self, message: Message, count: int, format: FormatType) -> Message:
        """
        Keep the first ``count`` items.

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        items = self.find_items(message, format)
        taken = items[:count]
        return self._rebuild(message, taken, format, {
            "operation": "take",
            "originalCount": len(items),
            "takenCount": len(taken)
        })

    def skip(self, message: Message, count: int, format: FormatType) -> Message:
        """
        Drop the first ``count`` items.

        Raises:
            ValueError: If count is negative
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        items = self.find_items(message, format)
        remaining = items[count:]
        return self._rebuild(message, remaining, format, {
            "operation": "skip",
            "originalCount": len(items),
            "skippedCount": count,
            "remainingCount": len(remaining)
        })

    def group_by(self, message: Message, key_extractor: Callable[[Node], str],
                 format: FormatType) -> Dict[str, List[Node]]:
        """
        Group items by a key; groups keep first-seen order and item order.
        """
        groups: Dict[str, List[Node]] = {}
        for item in self.find_items(message, format):
            groups.setdefault(key_extractor(item), []).append(item)
        return groups

    def extract_value(self, node: Node, key: str, format: FormatType) -> Primitive:
        """Look up a named value on a node; None when absent."""
        return self._semantics(format).query_strategy.extract_value(node, key)

    def navigate_path(self, node: Node, path: List[str], format: FormatType) -> Optional[Node]:
        """Follow a format-specific path; None when any segment misses."""
        return self._semantics(format).query_strategy.navigate_path(node, list(path))

    def query(self, message: Message, format: FormatType) -> 'FormatAwareQuery':
        """Start a chainable query over a message."""
        from .query import FormatAwareQuery
        return FormatAwareQuery(message, format, self)

    def _rebuild(self, message: Message, items: List[Node], format: FormatType,
                 processing: Dict[str, Any]) -> Message:
        """Rebuild the payload around ``items`` and record processing metadata."""
        semantics = self._semantics(format)
        processing = dict(processing, timestamp=datetime.now().isoformat())
        return message.with_data(semantics.rebuild(message.data, items)).with_metadata("processing", processing)
