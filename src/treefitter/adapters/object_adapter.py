"""Adapter between plain Python objects and node trees."""

import logging
from typing import Any, Dict, Iterable, List, Optional
from ..formats.csv_format import ROW_NAME
from ..models.node import Node, Primitive
from ..types import AdapterError, NodeKind

DEFAULT_ITEM_NAME = "item"
DEFAULT_DATASET_NAME = "dataset"


class ObjectAdapter:
    """
    Builds node trees from parsed JSON-style objects and back.

    Dicts become records of fields, lists become collections and scalars
    become values. Anything that is not a string, number, boolean or None is
    rejected here, at the boundary, so the core only ever sees primitives.
    """

    def __init__(self, item_name: str = DEFAULT_ITEM_NAME,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the adapter.

        Args:
            item_name: Name given to list elements
            logger: Optional logger instance
        """
        self.item_name = item_name
        self.logger = logger or logging.getLogger(__name__)

    def from_object(self, obj: Any, name: str = "root") -> Node:
        """
        Convert a Python object to a JSON-convention node tree.

        Args:
            obj: dict, list or primitive
            name: Name of the root node

        Returns:
            Root node

        Raises:
            AdapterError: If a value cannot be represented
        """
        if isinstance(obj, dict):
            return Node(kind=NodeKind.RECORD, name=name,
                        children=[self._field(str(key), value) for key, value in obj.items()])
        if isinstance(obj, (list, tuple)):
            return Node(kind=NodeKind.COLLECTION, name=name,
                        children=[self.from_object(item, self.item_name) for item in obj])
        return Node(kind=NodeKind.VALUE, name=name, value=self._primitive(obj, name))

    def _field(self, key: str, value: Any) -> Node:
        """Scalars become valued fields; nested structures keep their own kind."""
        if isinstance(value, (dict, list, tuple)):
            return self.from_object(value, key)
        return Node(kind=NodeKind.FIELD, name=key, value=self._primitive(value, key))

    def _primitive(self, value: Any, location: str) -> Primitive:
        if value is None or isinstance(value, (str, bool, int, float)):
            return value
        raise AdapterError(
            f"Unsupported value type at '{location}': {type(value).__name__}",
            context={"location": location}
        )

    def to_object(self, node: Node) -> Any:
        """
        Convert a JSON-convention node tree back to Python objects.

        Collections become lists, records become dicts and valued leaves
        become their value. Nodes of other kinds keep their children shape.
        """
        if node.kind == NodeKind.COLLECTION:
            return [self.to_object(child) for child in node.children or []]
        if node.kind == NodeKind.RECORD or node.children:
            result: Dict[str, Any] = {}
            for child in node.children or []:
                result[child.name] = self.to_object(child)
            return result
        return node.value

    def csv_from_rows(self, rows: Iterable[Dict[str, Any]],
                      name: str = DEFAULT_DATASET_NAME) -> Node:
        """
        Build a CSV-convention tree: a collection of records named ``row``.

        Raises:
            AdapterError: If a row is not a mapping or a cell is not primitive
        """
        row_nodes: List[Node] = []
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                raise AdapterError(f"Row {index} must be an object, got {type(row).__name__}",
                                   context={"row": index})
            row_nodes.append(Node(
                kind=NodeKind.RECORD,
                name=ROW_NAME,
                children=[
                    Node(kind=NodeKind.FIELD, name=str(column),
                         value=self._primitive(cell, f"{index}.{column}"))
                    for column, cell in row.items()
                ]
            ))
        self.logger.debug(f"Built CSV tree '{name}' with {len(row_nodes)} rows")
        return Node(kind=NodeKind.COLLECTION, name=name, children=row_nodes)
