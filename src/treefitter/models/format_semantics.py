"""Declarative per-format semantics record."""

from dataclasses import dataclass, field
from typing import Callable, Dict, FrozenSet, List, Optional
from ..types import (
    FormatError,
    FormatType,
    NodeKind,
    ROLE_CATEGORIES,
    SemanticRole,
    StructuralCategory,
    TransformationStrategy,
)
from .node import Node, Primitive


@dataclass(frozen=True)
class QueryStrategy:
    """
    The four query primitives of a format.

    Attributes:
        find_items: Children that count as queryable items
        extract_value: Named primitive lookup on an item
        navigate_path: Format-specific path walk, None when a segment misses
        reconstruct: Rebuild a container around a new item sequence
    """
    find_items: Callable[[Node], List[Node]]
    extract_value: Callable[[Node, str], Primitive]
    navigate_path: Callable[[Node, List[str]], Optional[Node]]
    reconstruct: Callable[[Node, List[Node]], Node]


@dataclass(frozen=True)
class FormatSemantics:
    """
    Rule table describing how one format's node kinds map onto semantic roles.

    ``type_to_role`` is consulted when reading a tree of this format,
    ``role_to_type`` when writing one. Both fall back to VALUE for unmapped
    entries, so conversion never fails on an unknown kind or role.
    """

    format: FormatType
    type_to_role: Dict[NodeKind, SemanticRole]
    role_to_type: Dict[SemanticRole, NodeKind]
    transformation_rules: Dict[StructuralCategory, TransformationStrategy]
    query_strategy: QueryStrategy
    # Canonical item name; items are renamed to it on rebuild
    item_name: Optional[str] = None
    description: str = field(default="", compare=False)

    def __post_init__(self):
        """Validate the rule table after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Every structural category needs a strategy."""
        missing = [category.value for category in StructuralCategory
                   if category not in self.transformation_rules]
        if missing:
            raise FormatError(
                f"Format {self.format.value} has no transformation rule for: {', '.join(missing)}",
                context={"format": self.format, "missing": missing}
            )

    def role_for(self, kind: NodeKind) -> SemanticRole:
        """Semantic role of a node kind when reading this format."""
        return self.type_to_role.get(kind, SemanticRole.VALUE)

    def kind_for(self, role: SemanticRole) -> NodeKind:
        """Node kind used for a semantic role when writing this format."""
        return self.role_to_type.get(role, NodeKind.VALUE)

    def strategy_for(self, role: SemanticRole) -> TransformationStrategy:
        """Transformation strategy for a role's structural category."""
        category = ROLE_CATEGORIES.get(role)
        if category is None:
            return TransformationStrategy.PRESERVE
        return self.transformation_rules[category]

    @property
    def attribute_strategy(self) -> TransformationStrategy:
        return self.transformation_rules[StructuralCategory.ATTRIBUTES]

    def rebuild(self, container: Node, items: List[Node]) -> Node:
        """
        Rebuild a container around new items with the query strategy.

        When the format names its items, every item is renamed to
        ``item_name`` first so rebuilt items stay discoverable by name.
        """
        if self.item_name is not None:
            items = [item.evolve(name=self.item_name) for item in items]
        return self.query_strategy.reconstruct(container, list(items))

    def readable_roles(self) -> FrozenSet[SemanticRole]:
        """Roles produced when reading this format."""
        return frozenset(self.type_to_role.values())

    def writable_roles(self) -> FrozenSet[SemanticRole]:
        """Roles this format can represent when written."""
        return frozenset(self.role_to_type.keys())
