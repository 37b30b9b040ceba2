"""Conversion of node trees between format conventions."""

import logging
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional, Set
from ..config import Configuration
from ..models.format_semantics import FormatSemantics
from ..models.message import Message
from ..models.node import Node
from ..models.semantic_node import SemanticNode
from ..profiler import OperationProfiler
from ..registry import FormatRegistry
from ..types import (
    CORE_ROLES,
    FormatType,
    NodeKind,
    SemanticRole,
    TransformationEngineInterface,
    TransformationStrategy,
)
from ..utils.tree_utils import count_nodes


class _LoweringMemo(dict):
    """Identity memo for one lowering pass, keyed by id of the semantic node."""

    def __init__(self):
        super().__init__()
        self.flattening: Set[int] = set()


class TransformationEngine(TransformationEngineInterface):
    """
    Converts node trees between the conventions of registered formats.

    Conversion runs in two phases. Lifting maps every node through the source
    format's kind-to-role table into a SemanticNode tree. Lowering rebuilds
    nodes through the target format's role-to-kind table, applying the
    target's transformation strategy to every child.

    Both phases memoize on object identity for the duration of one call, so
    shared nodes stay shared and cyclic back-references terminate.
    """

    def __init__(self, registry: Optional[FormatRegistry] = None,
                 config: Optional[Configuration] = None,
                 logger: Optional[logging.Logger] = None,
                 profiler: Optional[OperationProfiler] = None):
        """
        Initialize the transformation engine.

        Args:
            registry: Format registry; a new one holding the built-in formats
                is created when omitted
            config: Optional configuration
            logger: Optional logger instance
            profiler: Optional profiler recording each conversion
        """
        self.logger = logger or logging.getLogger(__name__)
        self.registry = registry if registry is not None else FormatRegistry.with_builtin_formats(self.logger)
        self.config = config or Configuration()
        self.profiler = profiler

    def register(self, semantics: FormatSemantics) -> None:
        """Register format semantics with the underlying registry."""
        self.registry.register(semantics)

    def get_semantics(self, format: FormatType) -> FormatSemantics:
        """
        Get registered semantics for a format.

        Raises:
            NotRegisteredError: If the format is not registered
        """
        return self.registry.lookup(format)

    def supported_formats(self) -> FrozenSet[FormatType]:
        """Return the registered format identifiers."""
        return self.registry.supported_formats()

    def convert(self, node: Node, source_format: FormatType,
                target_format: FormatType) -> Node:
        """
        Convert a node tree from one format's conventions to another's.

        Args:
            node: Root of the tree built under the source format's conventions
            source_format: Format the tree was built for
            target_format: Format to rebuild the tree for

        Returns:
            A new node tree; the input is not modified

        Raises:
            NotRegisteredError: If either format is not registered
        """
        source = self.get_semantics(source_format)
        target = self.get_semantics(target_format)

        if not self.config.enable_semantic_transforms:
            self.logger.debug("Semantic transforms disabled; returning input unchanged")
            return node

        self.logger.debug(f"Converting '{node.name}' from {source_format.value} to {target_format.value}")

        if self.profiler is None:
            return self.lower(self.lift(node, source), target)

        operation = f"convert_{source_format.value}_to_{target_format.value}"
        with self.profiler.profile_operation(operation, count_nodes(node)) as session:
            result = self.lower(self.lift(node, source), target)
            session.nodes_out = count_nodes(result)
        return result

    def convert_envelope(self, message: Message, source_format: FormatType,
                         target_format: FormatType) -> Message:
        """
        Convert a message payload and record provenance in its metadata.

        Args:
            message: Message whose ``data`` is converted
            source_format: Format the payload was built for
            target_format: Format to rebuild the payload for

        Returns:
            A new message with a ``transformation`` metadata namespace
        """
        converted = self.convert(message.data, source_format, target_format)
        return message.with_data(converted).with_metadata("transformation", {
            "sourceFormat": source_format.value,
            "targetFormat": target_format.value,
            "transformedAt": datetime.now().isoformat()
        })

    def is_compatible(self, source_format: FormatType, target_format: FormatType) -> bool:
        """
        Check whether the target can represent every core role the source produces.

        This only inspects the rule tables. A compatible pair may still lose
        data through drop, flatten or promote rules.

        Raises:
            NotRegisteredError: If either format is not registered
        """
        source_roles = self.get_semantics(source_format).readable_roles()
        target_roles = self.get_semantics(target_format).writable_roles()
        return all(role in target_roles for role in CORE_ROLES if role in source_roles)

    def lift(self, node: Node, semantics: FormatSemantics) -> SemanticNode:
        """Map a node graph onto semantic roles using a format's read table."""
        return self._lift(node, semantics, {})

    def _lift(self, node: Node, semantics: FormatSemantics,
              memo: Dict[int, SemanticNode]) -> SemanticNode:
        key = id(node)
        if key in memo:
            return memo[key]

        semantic = SemanticNode(
            role=semantics.role_for(node.kind),
            name=node.name,
            value=node.value,
            id=node.id,
            namespace=node.namespace,
            label=node.label
        )
        # Registered before descending so cycles resolve to this instance
        memo[key] = semantic

        semantic.children = [self._lift(child, semantics, memo) for child in node.children or []]
        semantic.parents = [self._lift(parent, semantics, memo) for parent in node.parents or []]
        semantic.attributes = [self._lift(attr, semantics, memo) for attr in node.attributes or []]
        return semantic

    def lower(self, semantic: SemanticNode, semantics: FormatSemantics) -> Node:
        """Rebuild nodes from a semantic tree using a format's write table and rules."""
        return self._lower(semantic, semantics, _LoweringMemo())

    def _lower(self, semantic: SemanticNode, semantics: FormatSemantics,
               memo: _LoweringMemo, kind: Optional[NodeKind] = None) -> Node:
        key = id(semantic)
        if key in memo:
            return memo[key]

        node = Node(
            kind=kind if kind is not None else semantics.kind_for(semantic.role),
            name=semantic.name,
            value=semantic.value,
            id=semantic.id,
            namespace=semantic.namespace,
            label=semantic.label
        )
        memo[key] = node

        node.children = self._lower_children(semantic.children, semantics, memo, node)
        node.attributes = self._lower_attributes(semantic.attributes, semantics, memo, node)
        node.parents = [self._lower(parent, semantics, memo) for parent in semantic.parents]
        return node

    def _lower_children(self, children: List[SemanticNode], semantics: FormatSemantics,
                        memo: _LoweringMemo, owner: Node) -> List[Node]:
        """Apply each child's strategy from the target rules, in order."""
        result: List[Node] = []
        for child in children:
            strategy = semantics.strategy_for(child.role)
            convert_kind = NodeKind.FIELD if child.role == SemanticRole.METADATA else None
            result.extend(self._apply_strategy(child, strategy, semantics, memo, owner, convert_kind))
        return result

    def _lower_attributes(self, attributes: List[SemanticNode], semantics: FormatSemantics,
                          memo: _LoweringMemo, owner: Node) -> Optional[List[Node]]:
        """
        Apply the target's attribute strategy to an attribute list.

        The result is never an empty list: DROP, an empty input, or a FLATTEN
        that splices in no children all yield None.
        """
        strategy = semantics.attribute_strategy
        if not attributes or strategy == TransformationStrategy.DROP:
            return None
        result: List[Node] = []
        for attr in attributes:
            result.extend(self._apply_strategy(attr, strategy, semantics, memo, owner, NodeKind.FIELD))
        return result or None

    def _apply_strategy(self, semantic: SemanticNode, strategy: TransformationStrategy,
                        semantics: FormatSemantics, memo: _LoweringMemo, owner: Node,
                        convert_kind: Optional[NodeKind]) -> List[Node]:
        """
        Rebuild one node under a transformation strategy.

        Args:
            semantic: Node to rebuild
            strategy: Strategy from the target format's rules
            semantics: Target format semantics
            memo: Per-call identity memo
            owner: Node being built at the current level; FLATTEN splices
                into it and back-references to the flattened node resolve to it
            convert_kind: Kind forced by CONVERT, None to keep the mapped kind

        Returns:
            Zero or more nodes to place at the current position
        """
        if strategy == TransformationStrategy.DROP:
            return []
        if strategy == TransformationStrategy.FLATTEN:
            key = id(semantic)
            if key in memo.flattening:
                return []
            # Spliced children inherit the owner as their rebuilt parent
            memo.setdefault(key, owner)
            memo.flattening.add(key)
            try:
                # Spliced nodes follow the rule of their own role
                return self._lower_children(semantic.children, semantics, memo, owner)
            finally:
                memo.flattening.discard(key)
        if strategy == TransformationStrategy.CONVERT:
            return [self._lower(semantic, semantics, memo, convert_kind)]
        if strategy == TransformationStrategy.PROMOTE:
            return [self._lower(semantic, semantics, memo, NodeKind.COMMENT)]
        if strategy == TransformationStrategy.DEMOTE:
            return [self._lower(semantic, semantics, memo, NodeKind.ATTRIBUTES)]
        return [self._lower(semantic, semantics, memo)]
