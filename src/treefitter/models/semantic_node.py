"""Transient role-tagged node used while converting between formats."""

from dataclasses import dataclass, field
from typing import List, Optional
from ..types import SemanticRole
from .node import Primitive


@dataclass(eq=False)
class SemanticNode:
    """
    Format-neutral intermediate node.

    Mirrors Node with ``role`` in place of ``kind``. Instances only live for
    the duration of a single conversion and are never returned to callers.
    """

    role: SemanticRole
    name: str
    value: Primitive = None
    id: Optional[str] = None
    namespace: Optional[str] = None
    label: Optional[str] = None
    children: List['SemanticNode'] = field(default_factory=list)
    parents: List['SemanticNode'] = field(default_factory=list)
    attributes: List['SemanticNode'] = field(default_factory=list)
