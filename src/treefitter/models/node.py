"""Format-neutral node model."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
from ..types import NodeKind

Primitive = Union[str, int, float, bool, None]

# Kinds that normally carry children rather than a value
CONTAINER_KINDS = (NodeKind.COLLECTION, NodeKind.RECORD)


@dataclass(eq=False)
class Node:
    """
    Universal tree element able to represent any supported structured format.

    Nodes are treated as immutable values: operations build new nodes through
    ``evolve`` instead of mutating in place. ``parents`` holds non-owning
    back-references to logically containing nodes and may form cycles.
    Equality is identity based so that graphs with back-references compare
    cheaply; use ``to_dict`` for structural comparison.
    """

    kind: NodeKind
    name: str
    value: Primitive = None
    id: Optional[str] = None
    namespace: Optional[str] = None
    label: Optional[str] = None
    children: List['Node'] = field(default_factory=list)
    parents: List['Node'] = field(default_factory=list)
    attributes: Optional[List['Node']] = None

    def is_leaf(self) -> bool:
        """Check whether this node has no children."""
        return not self.children

    def find_child(self, name: str) -> Optional['Node']:
        """Return the first child with the given name, if any."""
        for child in self.children or []:
            if child.name == name:
                return child
        return None

    def children_named(self, name: str) -> List['Node']:
        """Return all children with the given name, in order."""
        return [child for child in self.children or [] if child.name == name]

    def find_attribute(self, name: str) -> Optional['Node']:
        """Return the first attribute with the given name, if any."""
        for attr in self.attributes or []:
            if attr.name == name:
                return attr
        return None

    def evolve(self, **changes: Any) -> 'Node':
        """Return a shallow copy with the given fields replaced."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the node tree to plain dictionaries.

        Back-references are not serialized. Optional fields are only emitted
        when set.
        """
        result: Dict[str, Any] = {"type": self.kind.value, "name": self.name}
        if self.value is not None:
            result["value"] = self.value
        if self.id is not None:
            result["id"] = self.id
        if self.namespace is not None:
            result["ns"] = self.namespace
        if self.label is not None:
            result["label"] = self.label
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        if self.attributes is not None:
            result["attributes"] = [attr.to_dict() for attr in self.attributes]
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Node':
        """Create a node tree from the ``to_dict`` representation."""
        attributes = data.get("attributes")
        return cls(
            kind=NodeKind(data["type"]),
            name=data["name"],
            value=data.get("value"),
            id=data.get("id"),
            namespace=data.get("ns"),
            label=data.get("label"),
            children=[cls.from_dict(child) for child in data.get("children", [])],
            attributes=[cls.from_dict(attr) for attr in attributes] if attributes is not None else None
        )


def create_node(kind: NodeKind, name: str, value: Primitive = None,
                children: Optional[List[Node]] = None,
                attributes: Optional[List[Node]] = None,
                id: Optional[str] = None,
                namespace: Optional[str] = None,
                label: Optional[str] = None) -> Node:
    """
    Create a new node.

    Args:
        kind: Node kind
        name: Local name (tag, key, column header)
        value: Primitive value for leaf nodes
        children: Child nodes
        attributes: Attribute nodes
        id: Optional stable identifier
        namespace: Optional namespace URI
        label: Optional display label or prefix

    Returns:
        The new Node
    """
    return Node(
        kind=kind,
        name=name,
        value=value,
        id=id,
        namespace=namespace,
        label=label,
        children=list(children) if children else [],
        attributes=list(attributes) if attributes is not None else None
    )


def is_node(obj: Any) -> bool:
    """Check whether an object is a Node."""
    return isinstance(obj, Node) and isinstance(obj.kind, NodeKind) and isinstance(obj.name, str)
