"""JSON-like format semantics."""

from typing import List
from ..models.format_semantics import FormatSemantics, QueryStrategy
from ..models.node import Node
from ..types import (
    FormatType,
    NodeKind,
    SemanticRole,
    StructuralCategory,
    TransformationStrategy,
)
from .common import child_value, navigate_by_name, replace_children


def find_json_items(node: Node) -> List[Node]:
    """Records and nested collections count as items."""
    return [child for child in node.children or []
            if child.kind in (NodeKind.RECORD, NodeKind.COLLECTION)]


JSON_SEMANTICS = FormatSemantics(
    format=FormatType.JSON,
    type_to_role={
        NodeKind.COLLECTION: SemanticRole.CONTAINER,
        NodeKind.RECORD: SemanticRole.ITEM,
        NodeKind.FIELD: SemanticRole.PROPERTY,
        NodeKind.VALUE: SemanticRole.VALUE,
        NodeKind.COMMENT: SemanticRole.ANNOTATION,
    },
    role_to_type={
        SemanticRole.ROOT: NodeKind.RECORD,
        SemanticRole.CONTAINER: NodeKind.COLLECTION,
        SemanticRole.ITEM: NodeKind.RECORD,
        SemanticRole.PROPERTY: NodeKind.FIELD,
        SemanticRole.VALUE: NodeKind.VALUE,
    },
    transformation_rules={
        StructuralCategory.COLLECTIONS: TransformationStrategy.PRESERVE,
        StructuralCategory.RECORDS: TransformationStrategy.PRESERVE,
        # JSON has no attributes; they become ordinary fields
        StructuralCategory.ATTRIBUTES: TransformationStrategy.CONVERT,
        StructuralCategory.COMMENTS: TransformationStrategy.DROP,
    },
    query_strategy=QueryStrategy(
        find_items=find_json_items,
        extract_value=child_value,
        navigate_path=navigate_by_name,
        reconstruct=replace_children,
    ),
    description="Objects, arrays and scalars",
)
