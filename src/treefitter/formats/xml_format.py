"""XML-like format semantics."""

from typing import List, Optional
from ..models.format_semantics import FormatSemantics, QueryStrategy
from ..models.node import Node, Primitive
from ..types import (
    FormatType,
    NodeKind,
    SemanticRole,
    StructuralCategory,
    TransformationStrategy,
)
from .common import replace_children

ATTRIBUTE_PREFIX = "@"


def find_xml_elements(node: Node) -> List[Node]:
    return [child for child in node.children or [] if child.kind == NodeKind.RECORD]


def extract_xml_value(node: Node, key: str) -> Primitive:
    """Attributes shadow child elements of the same name."""
    attr = node.find_attribute(key)
    if attr is not None and attr.value is not None:
        return attr.value
    child = node.find_child(key)
    return child.value if child is not None else None


def navigate_xml_path(node: Node, path: List[str]) -> Optional[Node]:
    """
    Walk an XML path; ``@name`` selects an attribute and ends the walk.
    """
    current = node
    for segment in path:
        if segment.startswith(ATTRIBUTE_PREFIX):
            return current.find_attribute(segment[len(ATTRIBUTE_PREFIX):])
        current = current.find_child(segment)
        if current is None:
            return None
    return current


XML_SEMANTICS = FormatSemantics(
    format=FormatType.XML,
    type_to_role={
        NodeKind.RECORD: SemanticRole.ITEM,
        NodeKind.COLLECTION: SemanticRole.CONTAINER,
        NodeKind.FIELD: SemanticRole.PROPERTY,
        NodeKind.VALUE: SemanticRole.VALUE,
        NodeKind.ATTRIBUTES: SemanticRole.METADATA,
        NodeKind.COMMENT: SemanticRole.ANNOTATION,
        NodeKind.INSTRUCTION: SemanticRole.METADATA,
    },
    role_to_type={
        SemanticRole.ROOT: NodeKind.RECORD,
        SemanticRole.CONTAINER: NodeKind.COLLECTION,
        SemanticRole.ITEM: NodeKind.RECORD,
        SemanticRole.PROPERTY: NodeKind.FIELD,
        SemanticRole.VALUE: NodeKind.VALUE,
        SemanticRole.METADATA: NodeKind.ATTRIBUTES,
        SemanticRole.ANNOTATION: NodeKind.COMMENT,
    },
    transformation_rules={
        StructuralCategory.COLLECTIONS: TransformationStrategy.PRESERVE,
        StructuralCategory.RECORDS: TransformationStrategy.PRESERVE,
        StructuralCategory.ATTRIBUTES: TransformationStrategy.PRESERVE,
        StructuralCategory.COMMENTS: TransformationStrategy.PRESERVE,
    },
    query_strategy=QueryStrategy(
        find_items=find_xml_elements,
        extract_value=extract_xml_value,
        navigate_path=navigate_xml_path,
        reconstruct=replace_children,
    ),
    description="Elements with attributes, comments and processing instructions",
)
