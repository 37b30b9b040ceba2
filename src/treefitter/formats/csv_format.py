"""CSV-like format semantics."""

import re
from typing import List, Optional
from ..models.format_semantics import FormatSemantics, QueryStrategy
from ..models.node import Node
from ..types import (
    FormatType,
    NodeKind,
    SemanticRole,
    StructuralCategory,
    TransformationStrategy,
)
from .common import child_value, replace_children

ROW_NAME = "row"
_ROW_INDEX = re.compile(r"[0-9]+")


def find_csv_rows(node: Node) -> List[Node]:
    """Only children named ``row`` are items, whatever their kind."""
    return node.children_named(ROW_NAME)


def navigate_csv_path(node: Node, path: List[str]) -> Optional[Node]:
    """
    Walk a CSV path such as ``["row", "2", "name"]``.

    ``row`` descends into the first row unless an all-digit segment follows
    it, an all-digit segment selects a row by zero-based index and anything
    else is a column name.
    """
    current = node
    for position, segment in enumerate(path):
        if segment == ROW_NAME:
            following = path[position + 1] if position + 1 < len(path) else None
            if following is not None and _ROW_INDEX.fullmatch(following):
                continue
            next_node = current.find_child(ROW_NAME)
        elif _ROW_INDEX.fullmatch(segment):
            rows = current.children_named(ROW_NAME)
            index = int(segment)
            next_node = rows[index] if index < len(rows) else None
        else:
            next_node = current.find_child(segment)
        if next_node is None:
            return None
        current = next_node
    return current


CSV_SEMANTICS = FormatSemantics(
    format=FormatType.CSV,
    type_to_role={
        NodeKind.COLLECTION: SemanticRole.ROOT,
        NodeKind.RECORD: SemanticRole.ITEM,
        NodeKind.FIELD: SemanticRole.PROPERTY,
        NodeKind.VALUE: SemanticRole.VALUE,
    },
    role_to_type={
        SemanticRole.ROOT: NodeKind.COLLECTION,
        SemanticRole.CONTAINER: NodeKind.COLLECTION,
        SemanticRole.ITEM: NodeKind.RECORD,
        SemanticRole.PROPERTY: NodeKind.FIELD,
        SemanticRole.VALUE: NodeKind.VALUE,
    },
    transformation_rules={
        StructuralCategory.COLLECTIONS: TransformationStrategy.PRESERVE,
        StructuralCategory.RECORDS: TransformationStrategy.PRESERVE,
        StructuralCategory.ATTRIBUTES: TransformationStrategy.PROMOTE,
        StructuralCategory.COMMENTS: TransformationStrategy.PROMOTE,
    },
    query_strategy=QueryStrategy(
        find_items=find_csv_rows,
        extract_value=child_value,
        navigate_path=navigate_csv_path,
        reconstruct=replace_children,
    ),
    item_name=ROW_NAME,
    description="A dataset of rows holding named columns",
)
